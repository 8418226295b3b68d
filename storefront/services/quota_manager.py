"""
Quota management service
Classifies CDN storage usage and raises one disk warning per tier per day
"""
import logging
import math
import re
from datetime import date, datetime, time, timedelta
from typing import Callable, Optional

from bson import ObjectId
from pymongo.errors import DuplicateKeyError, PyMongoError

from storefront.exceptions import StorageError, ValidationError
from storefront.models.notification_models import NotificationType
from storefront.models.quota_models import (
    QuotaCheckResult, QuotaNotification, StorageTier, StorageUtilizationSample
)
from storefront.utils.formatting import format_bytes

logger = logging.getLogger(__name__)

WARNING_PERCENT = 85
CRITICAL_PERCENT = 95


def classify(
    used_bytes: int,
    capacity_bytes: int,
    warning_percent: int = WARNING_PERCENT,
    critical_percent: int = CRITICAL_PERCENT
) -> StorageUtilizationSample:
    """
    Turn a byte count into a utilization sample

    Args:
        used_bytes: Bytes in use (>= 0)
        capacity_bytes: Storage ceiling (> 0)

    Returns:
        Sample with percent rounded half-up and clamped to [0, 100]
    """
    if capacity_bytes <= 0:
        raise ValidationError("capacity_bytes must be positive")
    if used_bytes < 0:
        raise ValidationError("used_bytes must not be negative")

    raw = used_bytes / capacity_bytes * 100
    percent = float(min(100, max(0, math.floor(raw + 0.5))))

    if percent >= critical_percent:
        tier = StorageTier.CRITICAL
    elif percent >= warning_percent:
        tier = StorageTier.WARNING
    else:
        tier = StorageTier.OK

    return StorageUtilizationSample(
        used_bytes=used_bytes,
        capacity_bytes=capacity_bytes,
        percent=percent,
        tier=tier
    )


class QuotaNotifier:
    """
    Writes storage quota notifications

    The existence check and the insert are two separate round-trips; the
    unique index on ``dedup_key`` is what stops overlapping checks from
    both inserting.
    """

    TITLE_MARKER = "Disk nearly full"
    LINK_PATH = "/dashboard/static"

    def __init__(self, db, clock: Callable[[], datetime] = datetime.utcnow):
        self.db = db
        self.notifications = db.notifications
        self.clock = clock

    @staticmethod
    def day_bounds(day: date):
        start = datetime.combine(day, time.min)
        end = start + timedelta(hours=23, minutes=59, seconds=59, milliseconds=999)
        return start, end

    @staticmethod
    def dedup_key(day: date, tier: StorageTier) -> str:
        return f"storage_quota:{day.isoformat()}:{tier.value}"

    async def find_existing(self, tier: StorageTier, day: date) -> Optional[dict]:
        """Find a notification already raised for this tier on this day"""
        start, end = self.day_bounds(day)
        query = {
            "type": tier.value,
            "title": {"$regex": re.escape(self.TITLE_MARKER), "$options": "i"},
            "created_at": {"$gte": start, "$lt": end}
        }

        try:
            return await self.notifications.find_one(query)
        except PyMongoError as e:
            raise StorageError(f"Failed to read notifications: {e}")

    async def notify_if_needed(
        self,
        sample: StorageUtilizationSample,
        today: Optional[date] = None
    ) -> Optional[QuotaNotification]:
        """
        Create the day's quota notification for the sample's tier

        Returns:
            The created notification, or None for the ok tier and dedup hits

        Raises:
            StorageError: If the notification store fails
        """
        if sample.tier == StorageTier.OK:
            return None

        now = self.clock()
        if today is None:
            today = now.date()
        elif now.date() != today:
            # keep the record inside the day it was checked for
            now = datetime.combine(today, now.time())

        existing = await self.find_existing(sample.tier, today)
        if existing:
            logger.info(f"Quota notification for {sample.tier.value} already sent on {today}")
            return None

        percent = f"{sample.percent:.0f}"
        title = f"{self.TITLE_MARKER} ({percent}%)"
        body = (
            f"Cloudinary storage used {format_bytes(sample.used_bytes)} "
            f"of {format_bytes(sample.capacity_bytes)}. Clean up files that are no longer used."
        )

        notif_id = str(ObjectId())
        notif_doc = {
            "_id": notif_id,
            "type": NotificationType(sample.tier.value).value,
            "title": title,
            "body": body,
            "is_read": False,
            "link_path": self.LINK_PATH,
            "entity_type": "storage",
            "entity_id": None,
            "meta": {
                "percent": sample.percent,
                "used_bytes": sample.used_bytes,
                "capacity_bytes": sample.capacity_bytes,
                "tier": sample.tier.value,
                "date_key": today.isoformat()
            },
            "dedup_key": self.dedup_key(today, sample.tier),
            "created_at": now
        }

        try:
            await self.notifications.insert_one(notif_doc)
        except DuplicateKeyError:
            logger.info(f"Concurrent quota notification for {sample.tier.value} on {today}, skipped")
            return None
        except PyMongoError as e:
            raise StorageError(f"Failed to write notification: {e}")

        logger.warning(f"⚠️  {title}")

        return QuotaNotification(
            id=notif_id,
            date_key=today.isoformat(),
            tier=sample.tier,
            title=title,
            body=body,
            link=self.LINK_PATH
        )


async def run_quota_check(
    usage_client,
    notifier: QuotaNotifier,
    capacity_bytes: int,
    warning_percent: int = WARNING_PERCENT,
    critical_percent: int = CRITICAL_PERCENT
) -> QuotaCheckResult:
    """
    Fetch usage, classify it and notify when needed

    A report without usable byte data skips classification.
    """
    used_bytes = await usage_client.fetch_used_bytes()

    if used_bytes is None:
        logger.info("No storage info in usage report, quota check skipped")
        return QuotaCheckResult()

    sample = classify(used_bytes, capacity_bytes, warning_percent, critical_percent)
    notification = await notifier.notify_if_needed(sample)

    return QuotaCheckResult(sample=sample, notification=notification)
