"""
Tests for storage classification and quota notifications
"""
from datetime import date, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from storefront.exceptions import StorageError, ValidationError
from storefront.models.quota_models import StorageTier
from storefront.services.quota_manager import QuotaNotifier, classify, run_quota_check

GIB = 1024 * 1024 * 1024
NOW = datetime(2026, 10, 19, 10, 30)


def fixed_clock(moment=NOW):
    return lambda: moment


class TestClassify:

    @pytest.mark.parametrize("used, capacity, percent, tier", [
        (0, 100, 0.0, StorageTier.OK),
        (844, 1000, 84.0, StorageTier.OK),
        (846, 1000, 85.0, StorageTier.WARNING),
        (849, 1000, 85.0, StorageTier.WARNING),
        (944, 1000, 94.0, StorageTier.WARNING),
        (946, 1000, 95.0, StorageTier.CRITICAL),
        (1000, 1000, 100.0, StorageTier.CRITICAL),
        (5000, 1000, 100.0, StorageTier.CRITICAL),
    ])
    def test_tiers(self, used, capacity, percent, tier):
        sample = classify(used, capacity)

        assert sample.percent == percent
        assert sample.tier == tier

    def test_custom_thresholds(self):
        assert classify(50, 100, warning_percent=50, critical_percent=90).tier == StorageTier.WARNING

    def test_near_full_scenario(self):
        sample = classify(int(1.9 * GIB), 2 * GIB)

        assert sample.percent == 95.0
        assert sample.tier == StorageTier.CRITICAL

    def test_zero_capacity(self):
        with pytest.raises(ValidationError):
            classify(10, 0)

    def test_negative_usage(self):
        with pytest.raises(ValidationError):
            classify(-1, 100)


class TestQuotaNotifier:

    @pytest.mark.asyncio
    async def test_ok_tier_never_notifies(self, indexed_db):
        notifier = QuotaNotifier(indexed_db, clock=fixed_clock())

        assert await notifier.notify_if_needed(classify(10, 100)) is None
        assert await indexed_db.notifications.count_documents({}) == 0

    @pytest.mark.asyncio
    async def test_critical_notification(self, indexed_db):
        notifier = QuotaNotifier(indexed_db, clock=fixed_clock())

        notification = await notifier.notify_if_needed(classify(int(1.9 * GIB), 2 * GIB))

        assert notification.tier == StorageTier.CRITICAL
        assert notification.title == "Disk nearly full (95%)"
        assert notification.date_key == "2026-10-19"
        assert notification.link == "/dashboard/static"
        assert "1.90 GB" in notification.body
        assert "2.00 GB" in notification.body

        doc = await indexed_db.notifications.find_one({"_id": notification.id})
        assert doc["type"] == "critical"
        assert doc["is_read"] is False
        assert doc["entity_type"] == "storage"
        assert doc["meta"]["percent"] == 95.0
        assert doc["created_at"] == NOW

    @pytest.mark.asyncio
    async def test_one_notification_per_tier_per_day(self, indexed_db):
        notifier = QuotaNotifier(indexed_db, clock=fixed_clock())
        sample = classify(int(1.9 * GIB), 2 * GIB)

        first = await notifier.notify_if_needed(sample)
        second = await notifier.notify_if_needed(sample)

        assert first is not None
        assert second is None
        assert await indexed_db.notifications.count_documents({}) == 1

    @pytest.mark.asyncio
    async def test_tiers_are_tracked_separately(self, indexed_db):
        notifier = QuotaNotifier(indexed_db, clock=fixed_clock())

        warning = await notifier.notify_if_needed(classify(86, 100))
        critical = await notifier.notify_if_needed(classify(97, 100))

        assert warning.tier == StorageTier.WARNING
        assert critical.tier == StorageTier.CRITICAL
        assert await indexed_db.notifications.count_documents({}) == 2

    @pytest.mark.asyncio
    async def test_next_day_notifies_again(self, indexed_db):
        sample = classify(96, 100)

        await QuotaNotifier(indexed_db, clock=fixed_clock()).notify_if_needed(sample)
        again = await QuotaNotifier(
            indexed_db, clock=fixed_clock(datetime(2026, 10, 20, 0, 5))
        ).notify_if_needed(sample)

        assert again is not None
        assert again.date_key == "2026-10-20"
        assert await indexed_db.notifications.count_documents({}) == 2

    @pytest.mark.asyncio
    async def test_explicit_day_is_respected(self, indexed_db):
        notifier = QuotaNotifier(indexed_db, clock=fixed_clock())

        notification = await notifier.notify_if_needed(classify(96, 100), today=date(2026, 10, 18))

        assert notification.date_key == "2026-10-18"
        doc = await indexed_db.notifications.find_one({"_id": notification.id})
        assert doc["created_at"].date() == date(2026, 10, 18)

    @pytest.mark.asyncio
    async def test_matching_title_counts_regardless_of_case(self, indexed_db):
        await indexed_db.notifications.insert_one({
            "_id": "existing",
            "type": "warning",
            "title": "DISK NEARLY FULL (88%)",
            "created_at": datetime(2026, 10, 19, 1, 0)
        })
        notifier = QuotaNotifier(indexed_db, clock=fixed_clock())

        assert await notifier.notify_if_needed(classify(90, 100)) is None

    @pytest.mark.asyncio
    async def test_unique_key_stops_concurrent_duplicate(self, indexed_db):
        notifier = QuotaNotifier(indexed_db, clock=fixed_clock())
        # Another check inserted between our lookup and our insert
        await indexed_db.notifications.insert_one({
            "_id": "racer",
            "type": "info",
            "title": "placeholder",
            "dedup_key": "storage_quota:2026-10-19:critical",
            "created_at": NOW
        })

        assert await notifier.notify_if_needed(classify(99, 100)) is None
        assert await indexed_db.notifications.count_documents({}) == 1

    @pytest.mark.asyncio
    async def test_store_failure_raises_storage_error(self):
        db = MagicMock()
        db.notifications.find_one = AsyncMock(side_effect=ServerSelectionTimeoutError("down"))
        notifier = QuotaNotifier(db, clock=fixed_clock())

        with pytest.raises(StorageError):
            await notifier.notify_if_needed(classify(99, 100))

    @pytest.mark.asyncio
    async def test_insert_failure_raises_storage_error(self):
        db = MagicMock()
        db.notifications.find_one = AsyncMock(return_value=None)
        db.notifications.insert_one = AsyncMock(side_effect=ServerSelectionTimeoutError("down"))
        notifier = QuotaNotifier(db, clock=fixed_clock())

        with pytest.raises(StorageError):
            await notifier.notify_if_needed(classify(99, 100))


class TestRunQuotaCheck:

    @pytest.mark.asyncio
    async def test_near_full_creates_one_notification(self, indexed_db, usage_client, usage_report):
        usage_report["storage"]["usage"] = int(1.9 * GIB)
        notifier = QuotaNotifier(indexed_db, clock=fixed_clock())

        first = await run_quota_check(usage_client, notifier, 2 * GIB)
        second = await run_quota_check(usage_client, notifier, 2 * GIB)

        assert first.sample.percent == 95.0
        assert first.sample.tier == StorageTier.CRITICAL
        assert first.notification is not None
        assert second.has_data
        assert second.notification is None
        assert await indexed_db.notifications.count_documents({}) == 1

    @pytest.mark.asyncio
    async def test_no_storage_info(self, indexed_db, usage_client, usage_report):
        usage_report["storage"]["usage"] = "n/a"

        result = await run_quota_check(usage_client, QuotaNotifier(indexed_db), 2 * GIB)

        assert not result.has_data
        assert result.notification is None
        assert await indexed_db.notifications.count_documents({}) == 0
