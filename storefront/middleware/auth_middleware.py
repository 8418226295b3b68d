from fastapi import Depends, Header, HTTPException, status
from storefront.database import get_database
from datetime import datetime

async def verify_api_key(
    x_api_key: str = Header(..., alias="X-API-Key"),
    db=Depends(get_database)
) -> dict:
    api_key_doc = await db.api_keys.find_one({"key": x_api_key, "is_active": True})

    if not api_key_doc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")

    await db.api_keys.update_one({"_id": api_key_doc["_id"]}, {"$set": {"last_used": datetime.utcnow()}, "$inc": {"usage_count": 1}})

    return api_key_doc
