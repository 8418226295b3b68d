"""
Create an admin API key
Usage: python create_api_key.py "Dashboard"
"""
import asyncio
import sys

from storefront.database import connect_db, close_db, get_database
from storefront.services.auth_service import create_api_key


async def main(name: str):
    await connect_db()
    try:
        db = await get_database()
        api_key_doc = await create_api_key(db, name)
    finally:
        await close_db()

    print(f"✅ API Key created!")
    print(f"   Name: {name}")
    print(f"   Key: {api_key_doc['key']}")


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "Admin"))
