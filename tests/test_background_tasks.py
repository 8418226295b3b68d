"""
Tests for the periodic quota check
"""
from unittest.mock import MagicMock

import pytest

from storefront import background_tasks as background_module
from storefront.background_tasks import BackgroundTaskManager
from storefront.config import Settings

GIB = 1024 * 1024 * 1024


@pytest.fixture
def patched_environment(monkeypatch, indexed_db, usage_client):
    async def fake_get_database():
        return indexed_db

    factory = MagicMock()
    factory.from_settings.return_value = usage_client

    monkeypatch.setattr(background_module, "get_database", fake_get_database)
    monkeypatch.setattr(background_module, "CloudinaryUsageClient", factory)
    return indexed_db


class TestQuotaCheck:

    @pytest.mark.asyncio
    async def test_check_creates_notification(self, patched_environment, settings, usage_report):
        usage_report["storage"]["usage"] = int(1.9 * GIB)
        manager = BackgroundTaskManager(settings)

        first = await manager.check_quota()
        second = await manager.check_quota()

        assert first.notification.tier.value == "critical"
        assert second.notification is None
        assert await patched_environment.notifications.count_documents({}) == 1

    @pytest.mark.asyncio
    async def test_failures_are_logged_not_raised(self, monkeypatch, indexed_db, caplog):
        async def fake_get_database():
            return indexed_db

        monkeypatch.setattr(background_module, "get_database", fake_get_database)
        manager = BackgroundTaskManager(Settings(_env_file=None, CLOUDINARY_CLOUD_NAME=None))

        assert await manager.check_quota() is None
        assert "Quota check failed" in caplog.text

    @pytest.mark.asyncio
    async def test_start_and_stop(self, patched_environment, settings):
        manager = BackgroundTaskManager(settings)

        await manager.start()
        assert manager.running

        await manager.stop()
        assert not manager.running
        assert manager.task.cancelled() or manager.task.done()
