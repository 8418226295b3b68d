"""
API Key router
Admin key generation and management
"""
from fastapi import APIRouter, HTTPException, status, Depends

from storefront.database import get_database
from storefront.middleware.auth_middleware import verify_api_key
from storefront.services.auth_service import create_api_key, list_api_keys, revoke_api_key

router = APIRouter()

@router.post("/generate", response_model=dict, status_code=status.HTTP_201_CREATED)
async def generate_key(
    name: str,
    db=Depends(get_database),
    current_admin: dict = Depends(verify_api_key)
):
    """
    Generate a new admin API key

    Requires a valid admin key
    """
    api_key_doc = await create_api_key(db, name)

    return {
        "success": True,
        "message": "API key generated successfully",
        "api_key": api_key_doc["key"],
        "name": name,
        "warning": "Please save this API key. You won't be able to see it again!"
    }

@router.get("", response_model=dict)
async def list_keys(
    db=Depends(get_database),
    current_admin: dict = Depends(verify_api_key)
):
    """List admin API keys (masked)"""
    keys = await list_api_keys(db)

    return {"success": True, "keys": keys, "total": len(keys)}

@router.post("/revoke", response_model=dict)
async def revoke_key(
    key: str,
    db=Depends(get_database),
    current_admin: dict = Depends(verify_api_key)
):
    """Deactivate an admin API key"""
    if not await revoke_api_key(db, key):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="API key not found"
        )

    return {"success": True, "message": "API key revoked"}
