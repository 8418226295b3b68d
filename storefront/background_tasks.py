"""
Background Tasks
Periodic storage quota check
"""

import asyncio
import logging
from typing import Optional

from storefront.config import Settings, settings as default_settings
from storefront.database import get_database
from storefront.exceptions import StorefrontError
from storefront.models.quota_models import QuotaCheckResult
from storefront.services.cloudinary_client import CloudinaryUsageClient
from storefront.services.quota_manager import QuotaNotifier, run_quota_check

logger = logging.getLogger(__name__)

class BackgroundTaskManager:
    """
    Background Task Manager

    Handles periodic tasks like:
    - Checking CDN storage usage and raising "disk nearly full" notifications
    """

    def __init__(self, settings: Settings = default_settings):
        self.settings = settings
        self.running = False
        self.task = None

    async def start(self):
        """Start background tasks"""
        if self.running:
            logger.warning("Background tasks already running")
            return

        self.running = True
        self.task = asyncio.create_task(self._run_quota_loop())
        logger.info("Background tasks started")

    async def stop(self):
        """Stop background tasks"""
        if not self.running:
            return

        self.running = False
        if self.task:
            self.task.cancel()
            try:
                await self.task
            except asyncio.CancelledError:
                pass

        logger.info("Background tasks stopped")

    async def _run_quota_loop(self):
        """
        Main quota loop

        Checks storage usage every QUOTA_CHECK_INTERVAL_SECONDS
        """
        logger.info("Quota check loop started")

        while self.running:
            await self.check_quota()
            await asyncio.sleep(self.settings.QUOTA_CHECK_INTERVAL_SECONDS)

    async def check_quota(self) -> Optional[QuotaCheckResult]:
        """Run one quota check; failures are logged, never raised"""
        try:
            db = await get_database()
            result = await run_quota_check(
                CloudinaryUsageClient.from_settings(self.settings),
                QuotaNotifier(db),
                self.settings.STORAGE_CAPACITY_BYTES,
                self.settings.STORAGE_WARNING_PERCENT,
                self.settings.STORAGE_CRITICAL_PERCENT
            )
        except StorefrontError as e:
            logger.error(f"Quota check failed: {e.message}")
            return None
        except Exception as e:
            logger.exception(f"Unexpected error in quota check: {e}")
            return None

        if result.notification:
            logger.warning(f"📢 {result.notification.title}")

        return result

# Global instance
background_tasks = BackgroundTaskManager()
