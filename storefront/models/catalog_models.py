"""
Catalog Models
Products sold through WhatsApp and their price offers
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from enum import Enum

# ============================================================================
# Enums
# ============================================================================

class ProductCategory(str, Enum):
    """Storefront product categories"""
    STREAMING = "STREAMING"
    EDITING = "EDITING"
    EDUCATIONAL = "EDUCATIONAL"
    TOPUP_GAME = "TOPUP_GAME"
    SOCIAL_NEEDS = "SOCIAL_NEEDS"
    JASA = "JASA"
    OTHERS = "OTHERS"

CATEGORY_LABELS = {
    ProductCategory.STREAMING: "Streaming",
    ProductCategory.EDITING: "Editing",
    ProductCategory.EDUCATIONAL: "Educational",
    ProductCategory.TOPUP_GAME: "Topup Game",
    ProductCategory.SOCIAL_NEEDS: "Social Needs",
    ProductCategory.JASA: "Jasa",
    ProductCategory.OTHERS: "Others",
}

# Category filter value that matches every product
ALL_CATEGORIES = "ALL"

# Category assumed for products stored without one
FALLBACK_CATEGORY = ProductCategory.OTHERS.value

# ============================================================================
# Products
# ============================================================================

class ProductCreate(BaseModel):
    """Create product request"""
    name: str = Field(min_length=1, max_length=200)
    category: ProductCategory = ProductCategory.STREAMING
    type: str = Field(default="SHARING", max_length=50)
    description: Optional[str] = None
    image_url: Optional[str] = None
    image_public_id: Optional[str] = None
    wa_number: str = Field(min_length=1, max_length=30)

    # Badges
    promo: bool = False
    promo_text: Optional[str] = None
    garansi: bool = False
    support_device: bool = False

class ProductUpdate(BaseModel):
    """Update product request"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    category: Optional[ProductCategory] = None
    type: Optional[str] = Field(default=None, max_length=50)
    description: Optional[str] = None
    image_url: Optional[str] = None
    image_public_id: Optional[str] = None
    wa_number: Optional[str] = Field(default=None, min_length=1, max_length=30)
    promo: Optional[bool] = None
    promo_text: Optional[str] = None
    garansi: Optional[bool] = None
    support_device: Optional[bool] = None

class Offer(BaseModel):
    """Price offer for a product"""
    id: str
    product_id: str
    label: str
    unit: str
    qty: int
    price: int
    created_at: str

class OfferCreate(BaseModel):
    """Create offer request"""
    label: str = Field(min_length=1, max_length=100)
    unit: str = Field(min_length=1, max_length=30)
    qty: int = Field(gt=0)
    price: int = Field(gt=0)

class Product(BaseModel):
    """Product model"""
    id: str
    name: str
    category: Optional[str] = None
    type: str = ""
    description: Optional[str] = None
    image_url: Optional[str] = None
    image_public_id: Optional[str] = None
    wa_number: str = ""
    promo: bool = False
    promo_text: Optional[str] = None
    garansi: bool = False
    support_device: bool = False
    created_at: str
    offers: List[Offer] = []

class ProductListResponse(BaseModel):
    """Paged product listing"""
    products: List[Product]
    total: int
    page: int
    total_pages: int

# ============================================================================
# Ordering
# ============================================================================

class OrderRequest(BaseModel):
    """Storefront order click-through"""
    offer_id: Optional[str] = None

class OrderLinkResponse(BaseModel):
    """WhatsApp link the storefront redirects to"""
    click_id: str
    wa_link: str
    message: str
