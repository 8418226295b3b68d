"""
Cloudinary Admin API client
Reads account usage for the storage quota check
"""

import asyncio
import logging
import math
from typing import Any, Callable, Dict, Optional

import cloudinary.api
import cloudinary.exceptions

from storefront.config import Settings
from storefront.exceptions import ConfigurationError, UpstreamServiceError

logger = logging.getLogger(__name__)


def parse_used_bytes(usage_report: Dict[str, Any]) -> Optional[int]:
    """
    Extract the used storage bytes from a Cloudinary usage report

    Reads the documented ``storage.usage`` field only.

    Returns:
        Used bytes, or None when the value is missing, non-numeric or negative

    Raises:
        ConfigurationError: If the report has no ``storage`` section at all
    """
    storage = usage_report.get("storage") if isinstance(usage_report, dict) else None
    if not isinstance(storage, dict):
        raise ConfigurationError("Cloudinary usage report has no 'storage' section")

    value = storage.get("usage")

    if isinstance(value, bool):
        return None

    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None

    if not isinstance(value, (int, float)):
        return None

    if not math.isfinite(value) or value < 0:
        return None

    return int(value)


class CloudinaryUsageClient:
    """Async wrapper around the SDK's Admin API usage call"""

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        timeout: float = 10.0,
        usage_api: Optional[Callable[..., Dict[str, Any]]] = None
    ):
        if not (cloud_name and api_key and api_secret):
            raise ConfigurationError("Cloudinary cloud name, API key and API secret are required")

        self.cloud_name = cloud_name
        self.api_key = api_key
        self._api_secret = api_secret
        self.timeout = timeout
        self.usage_api = usage_api or cloudinary.api.usage

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        usage_api: Optional[Callable[..., Dict[str, Any]]] = None
    ) -> "CloudinaryUsageClient":
        return cls(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
            usage_api=usage_api
        )

    async def fetch_usage(self) -> Dict[str, Any]:
        """
        Fetch the raw account usage report

        Credentials go with the call instead of the global ``cloudinary.config``.

        Raises:
            UpstreamServiceError: On network failure or an error response
        """
        try:
            result = await asyncio.to_thread(
                self.usage_api,
                cloud_name=self.cloud_name,
                api_key=self.api_key,
                api_secret=self._api_secret,
                timeout=self.timeout
            )
        except cloudinary.exceptions.Error as e:
            logger.error(f"Cloudinary usage request failed: {e}")
            raise UpstreamServiceError(str(e) or "Cloudinary usage request failed")

        return dict(result)

    async def fetch_used_bytes(self) -> Optional[int]:
        """Fetch the report and normalize it to used bytes (None = no data)"""
        report = await self.fetch_usage()
        return parse_used_bytes(report)
