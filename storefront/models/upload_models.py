"""
Upload Models
Signed direct-to-CDN upload authorizations
"""

from pydantic import BaseModel
from typing import Optional
from enum import Enum

class UploadFolder(str, Enum):
    """Folder namespaces an upload may be signed for"""
    PRODUCTS = "products"
    POSTS = "posts"

class UploadAuthorization(BaseModel):
    """Signed parameters a browser presents to the CDN upload endpoint"""
    target_folder: str
    issued_at: int  # epoch seconds
    signature: str  # hex digest
    credential_id: str
    preset_name: Optional[str] = None

