"""
Upload Signer
Signs direct browser-to-Cloudinary uploads so the API secret never leaves the server
"""

import hmac
import logging
import time
from typing import Callable, Dict, Optional

import cloudinary.utils

from storefront.config import Settings
from storefront.exceptions import ConfigurationError
from storefront.models.upload_models import UploadAuthorization, UploadFolder

logger = logging.getLogger(__name__)


def compute_signature(params: Dict[str, object], api_secret: str) -> str:
    """
    Compute the upload signature the way Cloudinary verifies it

    Delegates to the SDK: SHA-1 over the sorted name=value pairs with the
    secret appended, hex encoded.
    """
    return cloudinary.utils.api_sign_request(dict(params), api_secret)


class UploadSigner:
    """
    Upload-authorization signer

    Every authorization is built fresh from the current clock; nothing is
    persisted. The CDN rejects authorizations whose timestamp is too old.
    """

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        root_folder: str = "mycms",
        upload_preset: Optional[str] = None,
        clock: Callable[[], float] = time.time
    ):
        missing = [
            name for name, value in (
                ("CLOUDINARY_CLOUD_NAME", cloud_name),
                ("CLOUDINARY_API_KEY", api_key),
                ("CLOUDINARY_API_SECRET", api_secret),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(f"Missing Cloudinary configuration: {', '.join(missing)}")

        self.cloud_name = cloud_name
        self.api_key = api_key
        self._api_secret = api_secret
        self.root_folder = root_folder.strip("/")
        self.upload_preset = upload_preset
        self.clock = clock

    @classmethod
    def from_settings(cls, settings: Settings, clock: Callable[[], float] = time.time) -> "UploadSigner":
        return cls(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            root_folder=settings.CLOUDINARY_ROOT_FOLDER,
            upload_preset=settings.CLOUDINARY_UPLOAD_PRESET,
            clock=clock
        )

    def resolve_folder(self, folder: UploadFolder) -> str:
        """Map a folder namespace to its full CDN path"""
        folder = UploadFolder(folder)
        if not self.root_folder:
            return folder.value
        return f"{self.root_folder}/{folder.value}"

    def build_params(
        self,
        target_folder: str,
        timestamp: int,
        preset_name: Optional[str] = None
    ) -> Dict[str, object]:
        """Exact parameter set that gets signed and sent with the upload"""
        params = {
            "folder": target_folder,
            "timestamp": timestamp,
        }

        preset = (preset_name or "").strip()
        if preset:
            params["upload_preset"] = preset

        return params

    def create_upload_authorization(
        self,
        folder: UploadFolder,
        preset_name: Optional[str] = None
    ) -> UploadAuthorization:
        """
        Create a signed upload authorization for a folder

        Args:
            folder: Folder namespace to upload into
            preset_name: Upload preset; falls back to the configured one.
                Blank presets are left out of the signed parameters.

        Returns:
            UploadAuthorization with the signature and public api key
        """
        target_folder = self.resolve_folder(folder)
        issued_at = int(self.clock())

        if preset_name is None:
            preset_name = self.upload_preset
        preset = (preset_name or "").strip() or None

        params = self.build_params(target_folder, issued_at, preset)
        signature = compute_signature(params, self._api_secret)

        logger.debug(f"Signed upload for folder {target_folder} at {issued_at}")

        return UploadAuthorization(
            target_folder=target_folder,
            issued_at=issued_at,
            signature=signature,
            credential_id=self.api_key,
            preset_name=preset
        )

    def verify_signature(self, params: Dict[str, object], signature: str) -> bool:
        """Recompute the signature for params and compare it to the given one"""
        expected = compute_signature(params, self._api_secret)
        if not isinstance(signature, str):
            return False
        return hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8"))
