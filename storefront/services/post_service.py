"""
Post Service
Blog-style posts
"""

from motor.motor_asyncio import AsyncIOMotorDatabase
from bson import ObjectId
from pymongo.errors import DuplicateKeyError
from datetime import datetime
from typing import List, Optional, Dict, Any
import logging

from storefront.exceptions import ValidationError
from storefront.models.post_models import Post, PostCreate, PostUpdate
from storefront.utils.formatting import slugify

logger = logging.getLogger(__name__)

class PostService:
    """Posts CRUD"""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.posts = db.posts

    async def create_post(self, request: PostCreate) -> Post:
        """Create a post; slug defaults to the slugified title"""

        slug = slugify(request.slug or request.title)
        if not slug:
            raise ValidationError("Slug is empty; use letters or digits in the title")

        doc = request.model_dump()
        doc["_id"] = str(ObjectId())
        doc["slug"] = slug
        doc["created_at"] = datetime.utcnow()

        try:
            await self.posts.insert_one(doc)
        except DuplicateKeyError:
            raise ValidationError(f"Slug already in use: {slug}")
        logger.info(f"Post created: {slug}")

        return self._doc_to_post(doc)

    async def list_posts(self, published_only: bool = False, limit: Optional[int] = None) -> List[Post]:
        """List posts, newest first"""

        query = {"published": True} if published_only else {}

        cursor = self.posts.find(query).sort("created_at", -1)
        if limit:
            cursor = cursor.limit(limit)

        return [self._doc_to_post(d) for d in await cursor.to_list(None)]

    async def get_post(self, post_id: str) -> Optional[Post]:
        doc = await self.posts.find_one({"_id": post_id})
        return self._doc_to_post(doc) if doc else None

    async def get_post_by_slug(self, slug: str) -> Optional[Post]:
        doc = await self.posts.find_one({"slug": slug})
        return self._doc_to_post(doc) if doc else None

    async def update_post(self, post_id: str, request: PostUpdate) -> Optional[Post]:
        """Apply the provided fields; returns None if the post does not exist"""

        update_doc = request.model_dump(exclude_none=True)

        if "slug" in update_doc:
            update_doc["slug"] = slugify(update_doc["slug"])
            if not update_doc["slug"]:
                raise ValidationError("Slug is empty; use letters or digits")

        if update_doc:
            try:
                result = await self.posts.update_one({"_id": post_id}, {"$set": update_doc})
            except DuplicateKeyError:
                raise ValidationError(f"Slug already in use: {update_doc['slug']}")
            if result.matched_count == 0:
                return None

        return await self.get_post(post_id)

    async def delete_post(self, post_id: str) -> bool:
        result = await self.posts.delete_one({"_id": post_id})
        return result.deleted_count > 0

    async def count_posts(self) -> int:
        return await self.posts.count_documents({})

    def _doc_to_post(self, doc: Dict[str, Any]) -> Post:
        return Post(
            id=str(doc["_id"]),
            title=doc["title"],
            slug=doc["slug"],
            content=doc.get("content"),
            published=doc.get("published", False),
            cover_url=doc.get("cover_url"),
            cover_public_id=doc.get("cover_public_id"),
            created_at=doc["created_at"].isoformat()
        )
