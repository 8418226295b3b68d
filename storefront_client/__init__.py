"""
WA Storefront - Python Client Library
Signed image uploads for products and posts
"""

__version__ = "1.0.0"

from .client import StorefrontClient
from .uploads import CoverUploader, CLOUDINARY_UPLOAD_URL
from .exceptions import (
    StorefrontClientError,
    AuthenticationError,
    NotFoundError,
    ValidationError,
    UploadError,
    ConnectionError
)

__all__ = [
    "StorefrontClient",
    "CoverUploader",
    "CLOUDINARY_UPLOAD_URL",
    "StorefrontClientError",
    "AuthenticationError",
    "NotFoundError",
    "ValidationError",
    "UploadError",
    "ConnectionError"
]
