from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Product(BaseModel):
    """A committed catalog entry. Every field is present and validated."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1, description="Unique product identifier, stable once assigned")
    name: str = Field(description="Product name shown on the menu")
    description: str = Field(default="", description="Short marketing description")
    price: Decimal = Field(ge=0, description="Unit price")
    category: str = Field(default="General", description="Free-form category label")
    image: Optional[str] = Field(default=None, description="Image URI or data payload")

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class ProductDraft(BaseModel):
    """Input shape of the catalog form. Nothing is required until submit."""
    name: Optional[str] = Field(default=None, description="Product name")
    description: Optional[str] = Field(default=None, description="Short marketing description")
    price: Optional[Decimal] = Field(default=None, description="Unit price")
    category: Optional[str] = Field(default=None, description="Category label")
    image: Optional[str] = Field(default=None, description="Image URI or data payload")

    @classmethod
    def from_product(cls, product: Product) -> "ProductDraft":
        return cls(**product.model_dump(exclude={"id"}))

    def to_product(self, product_id: str) -> Product:
        """Validate the draft into a Product; raises pydantic.ValidationError."""
        return Product(
            id=product_id,
            name=self.name or "",
            description=self.description or "",
            price=self.price,
            category=(self.category or "").strip() or "General",
            image=self.image or None,
        )
