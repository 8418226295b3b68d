"""
Shared FastAPI dependencies
Clients for the image CDN are built per request from the settings
"""
from fastapi import Depends
from typing import Callable

from storefront.config import Settings, get_settings
from storefront.database import get_database
from storefront.services.cloudinary_client import CloudinaryUsageClient
from storefront.services.quota_manager import QuotaNotifier
from storefront.services.upload_signer import UploadSigner


def get_upload_signer(settings: Settings = Depends(get_settings)) -> UploadSigner:
    return UploadSigner.from_settings(settings)


def get_usage_client(settings: Settings = Depends(get_settings)) -> CloudinaryUsageClient:
    return CloudinaryUsageClient.from_settings(settings)


async def get_quota_notifier(db=Depends(get_database)) -> QuotaNotifier:
    return QuotaNotifier(db)


def get_usage_client_factory(settings: Settings = Depends(get_settings)) -> Callable[[], CloudinaryUsageClient]:
    """Usage client built on demand; configuration errors surface at call time"""
    return lambda: CloudinaryUsageClient.from_settings(settings)
