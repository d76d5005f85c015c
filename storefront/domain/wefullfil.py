"""
WeFulFil Domain Models

Records returned by the WeFulFil dropshipping API and the results of importing
them into the storefront catalog.
"""
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List, Literal, Any
from decimal import Decimal


class WeFulFilVariant(BaseModel):
    id: str
    title: str = ""
    sku: Optional[str] = None
    price: Decimal = Decimal("0")
    inventory_quantity: int = 0
    option1: Optional[str] = None
    option2: Optional[str] = None
    option3: Optional[str] = None
    image: Optional[str] = None
    weight: Optional[float] = None
    weight_unit: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def id_to_str(cls, value: Any) -> str:
        return str(value)


class WeFulFilDimensions(BaseModel):
    length: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    unit: Optional[str] = None


class WeFulFilProduct(BaseModel):
    """
    Product from the WeFulFil catalog

    The listing endpoint returns title/inventory_quantity/categories while the
    bulk export uses name/quantity/category; both shapes are accepted.
    """
    id: str
    title: str
    sku: Optional[str] = None
    description: Optional[str] = None
    price: Decimal = Decimal("0")
    compare_at_price: Optional[Decimal] = None
    images: List[str] = Field(default_factory=list)
    variants: List[WeFulFilVariant] = Field(default_factory=list)
    inventory_quantity: int = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    vendor: Optional[str] = None
    categories: List[str] = Field(default_factory=list)
    subcategory: Optional[str] = None
    weight: Optional[float] = None
    weight_unit: Optional[str] = None
    dimensions: Optional[WeFulFilDimensions] = None

    @model_validator(mode="before")
    @classmethod
    def accept_export_shape(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if 'title' not in data and 'name' in data:
            data['title'] = data.pop('name')
        if 'inventory_quantity' not in data and 'quantity' in data:
            data['inventory_quantity'] = data.pop('quantity')
        if 'categories' not in data and data.get('category'):
            data['categories'] = [data.pop('category')]
        if data.get('id') is not None:
            data['id'] = str(data['id'])
        return data

    @property
    def in_stock(self) -> bool:
        return self.inventory_quantity > 0

    @property
    def primary_category(self) -> str:
        return self.categories[0] if self.categories else "Imported"


class WeFulFilPagination(BaseModel):
    total: int = 0
    count: int = 0
    per_page: int = 10
    current_page: int = 1
    total_pages: int = 1


class WeFulFilMeta(BaseModel):
    pagination: WeFulFilPagination = Field(default_factory=WeFulFilPagination)


class WeFulFilResponse(BaseModel):
    data: List[WeFulFilProduct] = Field(default_factory=list)
    meta: WeFulFilMeta = Field(default_factory=WeFulFilMeta)


class WeFulFilProductFilter(BaseModel):
    search: Optional[str] = None
    page: int = Field(1, ge=1)
    per_page: int = Field(10, ge=1, le=100)
    sort_by: Literal["title", "price", "created_at", "updated_at"] = "title"
    sort_order: Literal["asc", "desc"] = "asc"

    def to_params(self) -> dict:
        """Query parameters, skipping empty values"""
        return {
            key: str(value)
            for key, value in self.model_dump().items()
            if value is not None and value != ""
        }


class ImportResult(BaseModel):
    total: int = 0
    success: int = 0
    failed: int = 0
    job_id: Optional[str] = None


class AdminProduct(BaseModel):
    """Row of the admin products table"""
    id: str
    name: str
    vendor_name: str
    price: Decimal
    status: Literal["approved", "pending", "rejected"] = "pending"
    category: str
    subcategory: Optional[str] = None
    date_added: str
    store_id: str
    external_id: Optional[str] = None
    external_source: Optional[str] = None
    inventory_quantity: Optional[int] = None
    sku: Optional[str] = None
