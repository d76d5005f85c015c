"""
Product Domain Models

Storefront view of catalog rows: a product joined with its images and the
store/vendor that sells it, plus categories and subcategories.
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List
from datetime import datetime
from decimal import Decimal


DEFAULT_CATEGORY_IMAGE = (
    "https://images.unsplash.com/photo-1556742049-0cfed4f6a45d"
    "?ixlib=rb-1.2.1&auto=format&fit=crop&w=500&q=60"
)


class Product(BaseModel):
    """
    Product as shown on storefront pages

    Fields:
        id: Product ID (uuid)
        name: Product name
        slug: URL slug
        description: Long description ("" when missing)
        price: Selling price
        compare_at_price: Original price when the product is on sale
        images: Image URLs ordered by position
        category: Category name
        subcategory: Subcategory name (optional)
        rating: Average rating (0 when missing)
        review_count: Number of reviews (0 when missing)
        in_stock: Whether quantity > 0
        vendor_id: ID of the store selling the product
        vendor_name: Store name, then vendor business name, then "Store"
        vendor_slug: Store slug
        created_at: Creation timestamp
        product_type: "simple", "variable" or "downloadable" (optional)
    """

    id: str = Field(..., description="Product ID")
    name: str = Field(..., description="Product name")
    slug: str = Field(..., description="URL slug")
    description: str = Field("", description="Product description")
    price: Decimal = Field(..., description="Selling price", ge=0)
    compare_at_price: Optional[Decimal] = Field(None, description="Price before discount")
    images: List[str] = Field(default_factory=list, description="Image URLs")
    category: str = Field("", description="Category name")
    subcategory: Optional[str] = Field(None, description="Subcategory name")
    rating: float = Field(0, description="Average rating")
    review_count: int = Field(0, description="Number of reviews")
    in_stock: bool = Field(False, description="Whether the product has stock")
    vendor_id: Optional[str] = Field(None, description="Store ID")
    vendor_name: str = Field("Store", description="Store display name")
    vendor_slug: Optional[str] = Field(None, description="Store slug")
    created_at: datetime = Field(..., description="Creation timestamp")
    product_type: Optional[str] = Field(None, description="simple, variable or downloadable")

    model_config = ConfigDict(from_attributes=True)

    @property
    def is_on_sale(self) -> bool:
        return self.compare_at_price is not None and self.compare_at_price > self.price

    @property
    def discount_percentage(self) -> float:
        """Discount off compare_at_price, 0 when not on sale"""
        if not self.is_on_sale:
            return 0.0
        return float((self.compare_at_price - self.price) / self.compare_at_price * 100)

    @property
    def image(self) -> str:
        return self.images[0] if self.images else ""

    def to_dict(self) -> dict:
        """Convert to dictionary with computed fields and floats for money"""
        data = self.model_dump()
        data['price'] = float(self.price)
        if self.compare_at_price is not None:
            data['compare_at_price'] = float(self.compare_at_price)
        data['is_on_sale'] = self.is_on_sale
        data['discount_percentage'] = round(self.discount_percentage, 2)
        return data


class Subcategory(BaseModel):
    id: str
    name: str
    slug: str


class Category(BaseModel):
    """Active catalog category with its subcategories"""
    id: str
    name: str
    slug: str
    image: str = DEFAULT_CATEGORY_IMAGE
    subcategories: List[Subcategory] = Field(default_factory=list)


class ProductRecord(BaseModel):
    """Row written to the products table (imports, vendor uploads)"""
    store_id: Optional[str] = None
    name: str
    slug: str
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0)
    compare_at_price: Optional[Decimal] = None
    quantity: int = 0
    category: str = "Imported"
    subcategory: Optional[str] = None
    sku: Optional[str] = None
    status: str = "approved"
    external_source: Optional[str] = None
    external_id: Optional[str] = None
