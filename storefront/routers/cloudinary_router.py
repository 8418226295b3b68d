"""
Cloudinary Router
Upload signing for the browser widget and CDN storage usage
"""

from fastapi import APIRouter, Depends, Query

from storefront.config import Settings, get_settings
from storefront.dependencies import get_upload_signer, get_usage_client
from storefront.middleware.auth_middleware import verify_api_key
from storefront.models.upload_models import UploadFolder
from storefront.services.cloudinary_client import CloudinaryUsageClient
from storefront.services.quota_manager import classify
from storefront.services.upload_signer import UploadSigner
from storefront.utils.formatting import format_bytes

router = APIRouter(prefix="/cloudinary", tags=["Cloudinary"])


@router.get("/sign")
async def sign_upload(
    folder: UploadFolder = Query(..., description="Folder namespace: products or posts"),
    signer: UploadSigner = Depends(get_upload_signer),
    current_admin: dict = Depends(verify_api_key)
):
    """
    Sign a direct browser upload

    The browser posts the file with these fields straight to Cloudinary;
    the API secret never leaves the server. Only the configured upload
    preset is ever signed.
    """

    authorization = signer.create_upload_authorization(folder)

    return {
        "cloudName": signer.cloud_name,
        "apiKey": authorization.credential_id,
        "timestamp": authorization.issued_at,
        "signature": authorization.signature,
        "folder": authorization.target_folder,
        "uploadPreset": authorization.preset_name
    }


@router.get("/usage")
async def storage_usage(
    usage_client: CloudinaryUsageClient = Depends(get_usage_client),
    settings: Settings = Depends(get_settings),
    current_admin: dict = Depends(verify_api_key)
):
    """
    Get CDN storage usage against the configured capacity

    bytes, percent and tier are null when the report carries no usable data.
    """

    used_bytes = await usage_client.fetch_used_bytes()
    capacity = settings.STORAGE_CAPACITY_BYTES

    response = {
        "ok": True,
        "bytes": used_bytes,
        "capacity_bytes": capacity,
        "capacity_formatted": format_bytes(capacity),
        "percent": None,
        "tier": None,
        "used_formatted": None
    }

    if used_bytes is not None:
        sample = classify(
            used_bytes,
            capacity,
            settings.STORAGE_WARNING_PERCENT,
            settings.STORAGE_CRITICAL_PERCENT
        )
        response.update({
            "percent": sample.percent,
            "tier": sample.tier.value,
            "used_formatted": format_bytes(used_bytes)
        })

    return response
