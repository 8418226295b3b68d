"""
Post Models
Blog-style posts shown on the storefront
"""

from pydantic import BaseModel, Field
from typing import Optional

class PostCreate(BaseModel):
    """Create post request"""
    title: str = Field(min_length=1, max_length=200)
    slug: Optional[str] = Field(default=None, max_length=200)  # derived from title when empty
    content: Optional[str] = None
    published: bool = False
    cover_url: Optional[str] = None
    cover_public_id: Optional[str] = None

class PostUpdate(BaseModel):
    """Update post request"""
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    slug: Optional[str] = Field(default=None, max_length=200)
    content: Optional[str] = None
    published: Optional[bool] = None
    cover_url: Optional[str] = None
    cover_public_id: Optional[str] = None

class Post(BaseModel):
    """Post model"""
    id: str
    title: str
    slug: str
    content: Optional[str] = None
    published: bool = False
    cover_url: Optional[str] = None
    cover_public_id: Optional[str] = None
    created_at: str
