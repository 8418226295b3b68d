"""
Authentication service
Admin API keys for the dashboard endpoints
"""

from datetime import datetime
from typing import Any, Dict, List
import secrets

def generate_api_key() -> str:
    """
    Generate a secure API key

    Returns:
        API key with 'wsa_' prefix
    """
    # Generate 32 random bytes and encode as URL-safe base64
    random_key = secrets.token_urlsafe(32)
    return f"wsa_{random_key}"

async def create_api_key(db, name: str) -> Dict[str, Any]:
    """Store a new active admin key and return its document"""
    api_key_doc = {
        "key": generate_api_key(),
        "name": name,
        "usage_count": 0,
        "last_used": None,
        "created_at": datetime.utcnow(),
        "is_active": True
    }

    await db.api_keys.insert_one(api_key_doc)
    return api_key_doc

async def revoke_api_key(db, key: str) -> bool:
    """Deactivate a key; returns False if it does not exist"""
    result = await db.api_keys.update_one(
        {"key": key},
        {"$set": {"is_active": False, "revoked_at": datetime.utcnow()}}
    )
    return result.matched_count > 0

async def list_api_keys(db) -> List[Dict[str, Any]]:
    """List keys with the secret part masked"""
    keys = await db.api_keys.find({}).sort("created_at", -1).to_list(None)

    return [
        {
            "name": k["name"],
            "key": k["key"][:8] + "..." + k["key"][-4:],
            "usage_count": k.get("usage_count", 0),
            "last_used": k.get("last_used").isoformat() if k.get("last_used") else None,
            "created_at": k["created_at"].isoformat(),
            "is_active": k.get("is_active", True)
        }
        for k in keys
    ]
