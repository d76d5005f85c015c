"""
Cart and Wishlist Domain Models

Plain state containers. A cart holds one line per product; the subtotal is
always derived from the lines, never stored.
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from decimal import Decimal


class CartItemInput(BaseModel):
    """Item as submitted by "Add to cart" (quantity is implied)"""
    product_id: str
    name: str
    price: Decimal = Field(..., ge=0)
    image: str = ""
    product_type: Optional[str] = None


class CartItem(CartItemInput):
    quantity: int = Field(1, ge=1)

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class Cart(BaseModel):
    items: List[CartItem] = Field(default_factory=list)

    @property
    def subtotal(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal("0"))

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def find(self, product_id: str) -> Optional[CartItem]:
        return next((item for item in self.items if item.product_id == product_id), None)

    def add(self, item: CartItemInput) -> CartItem:
        """Add one unit of a product, incrementing the line when it exists"""
        existing = self.find(item.product_id)
        if existing:
            existing.quantity += 1
            return existing

        line = CartItem(**item.model_dump(), quantity=1)
        self.items.append(line)
        return line

    def remove(self, product_id: str) -> None:
        self.items = [item for item in self.items if item.product_id != product_id]

    def update_quantity(self, product_id: str, quantity: int) -> None:
        """Set a line's quantity; anything below 1 removes the line"""
        if quantity < 1:
            self.remove(product_id)
            return

        line = self.find(product_id)
        if line:
            line.quantity = quantity

    def clear(self) -> None:
        self.items = []

    def to_dict(self) -> dict:
        return {
            'items': [
                {**item.model_dump(), 'price': float(item.price), 'line_total': float(item.line_total)}
                for item in self.items
            ],
            'item_count': self.item_count,
            'subtotal': float(self.subtotal),
        }


class Wishlist(BaseModel):
    """Ordered set of product IDs"""
    product_ids: List[str] = Field(default_factory=list)

    def contains(self, product_id: str) -> bool:
        return product_id in self.product_ids

    def add(self, product_id: str) -> bool:
        """Returns False when the product was already wishlisted"""
        if self.contains(product_id):
            return False
        self.product_ids.append(product_id)
        return True

    def remove(self, product_id: str) -> None:
        self.product_ids = [pid for pid in self.product_ids if pid != product_id]

    def toggle(self, product_id: str) -> bool:
        """Flip membership; returns True when the product is now wishlisted"""
        if self.contains(product_id):
            self.remove(product_id)
            return False
        self.add(product_id)
        return True
