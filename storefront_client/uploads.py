"""
Cover image uploads
Signs through the storefront backend, then posts straight to the image CDN
"""

from typing import Any, BinaryIO, Dict, Optional, Union
from pathlib import Path
import requests

from .exceptions import ConnectionError, UploadError

CLOUDINARY_UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"

class CoverUploader:
    """Uploads product and post cover images"""

    def __init__(self, client, session: Optional[requests.Session] = None, timeout: float = 120):
        """
        Initialize CoverUploader

        Args:
            client: StorefrontClient instance used for signing
            session: Session for the CDN request (the admin key is never sent there)
        """
        self.client = client
        self.session = session or requests.Session()
        self.timeout = timeout

    def upload(
        self,
        file: Union[str, Path, BinaryIO],
        folder: str,
        filename: Optional[str] = None
    ) -> Dict[str, str]:
        """
        Upload an image into a folder namespace

        Args:
            file: Path to the image or file-like object
            folder: "products" or "posts"
            filename: Name sent with the file (auto-detected from path)

        Returns:
            {"url": secure URL, "public_id": CDN public id}

        Example:
            >>> uploader = CoverUploader(StorefrontClient(api_key="wsa_..."))
            >>> uploader.upload("banner.jpg", "products")["url"]
        """
        if isinstance(file, (str, Path)):
            path = Path(file)
            if not path.exists():
                raise FileNotFoundError(f"File not found: {path}")
            with open(path, "rb") as f:
                return self._upload(f.read(), filename or path.name, folder)

        return self._upload(file.read(), filename or getattr(file, "name", "cover"), folder)

    def _upload(self, content: bytes, filename: str, folder: str) -> Dict[str, str]:
        sig = self.client.sign_upload(folder)

        form = {
            "api_key": sig["apiKey"],
            "timestamp": str(sig["timestamp"]),
            "signature": sig["signature"],
            "folder": sig["folder"]
        }
        if sig.get("uploadPreset"):
            form["upload_preset"] = sig["uploadPreset"]

        url = CLOUDINARY_UPLOAD_URL.format(cloud_name=sig["cloudName"])

        try:
            response = self.session.post(
                url,
                data=form,
                files={"file": (Path(str(filename)).name, content)},
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            raise ConnectionError(f"Upload failed: {str(e)}", status_code=503)

        try:
            data: Dict[str, Any] = response.json()
        except ValueError:
            raise UploadError(response.text or f"HTTP {response.status_code}", status_code=response.status_code)

        if "error" in data:
            raise UploadError(data["error"].get("message", "Upload failed"), status_code=response.status_code)

        return {"url": data["secure_url"], "public_id": data["public_id"]}
