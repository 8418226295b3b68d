"""
Catalog Service
Products and their price offers
"""

from motor.motor_asyncio import AsyncIOMotorDatabase
from bson import ObjectId
from datetime import datetime
from typing import Dict, List, Optional, Any
import logging

from storefront.models.catalog_models import (
    Offer, OfferCreate, Product, ProductCreate, ProductUpdate
)

logger = logging.getLogger(__name__)

class CatalogService:
    """Products CRUD plus offers; deleting a product removes its offers"""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.products = db.products
        self.offers = db.product_offers

    # ========================================================================
    # PRODUCTS
    # ========================================================================

    async def create_product(self, request: ProductCreate) -> Product:
        """Create a product"""

        product_id = str(ObjectId())
        doc = request.model_dump()
        doc["category"] = request.category.value
        doc["promo_text"] = self._promo_text(request.promo, request.promo_text)
        doc["_id"] = product_id
        doc["created_at"] = datetime.utcnow()

        await self.products.insert_one(doc)
        logger.info(f"Product created: {request.name} ({product_id})")

        return self._doc_to_product(doc)

    async def list_products(self, limit: Optional[int] = None, with_offers: bool = False) -> List[Product]:
        """List products, newest first"""

        cursor = self.products.find({}).sort("created_at", -1)
        if limit:
            cursor = cursor.limit(limit)
        docs = await cursor.to_list(None)

        offers_by_product: Dict[str, List[Offer]] = {}
        if with_offers and docs:
            offers_by_product = await self.offers_for([d["_id"] for d in docs])

        return [
            self._doc_to_product(d, offers_by_product.get(d["_id"], []))
            for d in docs
        ]

    async def get_product(self, product_id: str) -> Optional[Product]:
        """Get product with its offers"""

        doc = await self.products.find_one({"_id": product_id})
        if not doc:
            return None

        offers = await self.list_offers(product_id)
        return self._doc_to_product(doc, offers)

    async def update_product(self, product_id: str, request: ProductUpdate) -> Optional[Product]:
        """Apply the provided fields; returns None if the product does not exist"""

        existing = await self.products.find_one({"_id": product_id})
        if not existing:
            return None

        update_doc = request.model_dump(exclude_none=True)
        if "category" in update_doc:
            update_doc["category"] = request.category.value

        promo = update_doc.get("promo", existing.get("promo", False))
        promo_text = update_doc.get("promo_text", existing.get("promo_text"))
        update_doc["promo_text"] = self._promo_text(promo, promo_text)

        await self.products.update_one({"_id": product_id}, {"$set": update_doc})

        return await self.get_product(product_id)

    async def delete_product(self, product_id: str) -> bool:
        """Delete product and its offers"""

        await self.offers.delete_many({"product_id": product_id})
        result = await self.products.delete_one({"_id": product_id})

        return result.deleted_count > 0

    async def count_products(self) -> int:
        return await self.products.count_documents({})

    async def names_for(self, product_ids: List[str]) -> Dict[str, str]:
        """Map product id to name for the given ids"""

        docs = await self.products.find(
            {"_id": {"$in": product_ids}},
            {"name": 1}
        ).to_list(None)

        return {d["_id"]: d.get("name", "") for d in docs}

    # ========================================================================
    # OFFERS
    # ========================================================================

    async def add_offer(self, product_id: str, request: OfferCreate) -> Optional[Offer]:
        """Add an offer; returns None if the product does not exist"""

        product = await self.products.find_one({"_id": product_id}, {"_id": 1})
        if not product:
            return None

        doc = request.model_dump()
        doc["_id"] = str(ObjectId())
        doc["product_id"] = product_id
        doc["created_at"] = datetime.utcnow()

        await self.offers.insert_one(doc)

        return self._doc_to_offer(doc)

    async def list_offers(self, product_id: str) -> List[Offer]:
        """Offers of a product, oldest first"""

        docs = await self.offers.find({"product_id": product_id})\
            .sort("created_at", 1)\
            .to_list(None)

        return [self._doc_to_offer(d) for d in docs]

    async def offers_for(self, product_ids: List[str]) -> Dict[str, List[Offer]]:
        """Offers grouped by product id"""

        docs = await self.offers.find({"product_id": {"$in": product_ids}})\
            .sort("created_at", 1)\
            .to_list(None)

        grouped: Dict[str, List[Offer]] = {}
        for d in docs:
            grouped.setdefault(d["product_id"], []).append(self._doc_to_offer(d))

        return grouped

    async def get_offer(self, offer_id: str) -> Optional[Offer]:
        doc = await self.offers.find_one({"_id": offer_id})
        return self._doc_to_offer(doc) if doc else None

    async def delete_offer(self, offer_id: str) -> bool:
        result = await self.offers.delete_one({"_id": offer_id})
        return result.deleted_count > 0

    # ========================================================================
    # HELPER METHODS
    # ========================================================================

    @staticmethod
    def _promo_text(promo: bool, promo_text: Optional[str]) -> Optional[str]:
        """Promo text only survives while the promo flag is on"""
        if not promo:
            return None
        return (promo_text or "").strip() or None

    def _doc_to_product(self, doc: Dict[str, Any], offers: Optional[List[Offer]] = None) -> Product:
        return Product(
            id=str(doc["_id"]),
            name=doc["name"],
            category=doc.get("category"),
            type=doc.get("type") or "",
            description=doc.get("description"),
            image_url=doc.get("image_url"),
            image_public_id=doc.get("image_public_id"),
            wa_number=doc.get("wa_number") or "",
            promo=doc.get("promo", False),
            promo_text=doc.get("promo_text"),
            garansi=doc.get("garansi", False),
            support_device=doc.get("support_device", False),
            created_at=doc["created_at"].isoformat(),
            offers=offers or []
        )

    def _doc_to_offer(self, doc: Dict[str, Any]) -> Offer:
        return Offer(
            id=str(doc["_id"]),
            product_id=doc["product_id"],
            label=doc["label"],
            unit=doc["unit"],
            qty=doc["qty"],
            price=doc["price"],
            created_at=doc["created_at"].isoformat()
        )
