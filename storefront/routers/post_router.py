"""
Post Router
Admin CRUD for posts plus the public listing
"""

from fastapi import APIRouter, HTTPException, Depends, status, Query
from typing import List, Optional

from storefront.database import get_database
from storefront.middleware.auth_middleware import verify_api_key
from storefront.models.post_models import Post, PostCreate, PostUpdate
from storefront.services.post_service import PostService

router = APIRouter(tags=["Posts"])


def _not_found(post_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Post {post_id} not found"
    )

# ============================================================================
# PUBLIC
# ============================================================================

@router.get("/storefront/posts", response_model=List[Post])
async def list_published_posts(
    limit: Optional[int] = Query(None, ge=1, le=100),
    db=Depends(get_database)
):
    """Published posts, newest first"""
    return await PostService(db).list_posts(published_only=True, limit=limit)


@router.get("/storefront/posts/{slug}", response_model=Post)
async def get_published_post(slug: str, db=Depends(get_database)):
    """Published post by slug"""

    post = await PostService(db).get_post_by_slug(slug)
    if not post or not post.published:
        raise _not_found(slug)

    return post

# ============================================================================
# ADMIN
# ============================================================================

@router.post("/posts", response_model=Post, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: PostCreate,
    db=Depends(get_database),
    current_admin: dict = Depends(verify_api_key)
):
    """Create a post; the slug is derived from the title when omitted"""
    return await PostService(db).create_post(request)


@router.get("/posts", response_model=List[Post])
async def list_posts(
    published_only: bool = Query(False),
    limit: Optional[int] = Query(None, ge=1, le=500),
    db=Depends(get_database),
    current_admin: dict = Depends(verify_api_key)
):
    """List posts, newest first"""
    return await PostService(db).list_posts(published_only=published_only, limit=limit)


@router.get("/posts/{post_id}", response_model=Post)
async def get_post(
    post_id: str,
    db=Depends(get_database),
    current_admin: dict = Depends(verify_api_key)
):
    post = await PostService(db).get_post(post_id)
    if not post:
        raise _not_found(post_id)

    return post


@router.put("/posts/{post_id}", response_model=Post)
async def update_post(
    post_id: str,
    request: PostUpdate,
    db=Depends(get_database),
    current_admin: dict = Depends(verify_api_key)
):
    post = await PostService(db).update_post(post_id, request)
    if not post:
        raise _not_found(post_id)

    return post


@router.delete("/posts/{post_id}")
async def delete_post(
    post_id: str,
    db=Depends(get_database),
    current_admin: dict = Depends(verify_api_key)
):
    if not await PostService(db).delete_post(post_id):
        raise _not_found(post_id)

    return {"success": True, "message": "Post deleted"}
