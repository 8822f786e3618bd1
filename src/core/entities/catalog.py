"""Product catalog entities."""

from datetime import datetime

from pydantic import BaseModel, Field


class Product(BaseModel):
    """A sellable product owned by one company.

    Prices are excluding tax. ``tva`` is optional; when it is unset the
    configured default rate applies.
    """

    id: str | None = None
    company_id: str
    name: str
    sub_name: str | None = None
    description: str | None = None
    price_ht: float = Field(ge=0)
    tva: float | None = Field(default=None, ge=0)  # percent
    barcode: str | None = None
    is_active: bool = True
    image_urls: list[str] = Field(default_factory=list)
    created_at: datetime | None = None

    @property
    def display_name(self) -> str:
        """Name with the sub-name appended, as shown in lists and alerts."""
        if self.sub_name:
            return f"{self.name} - {self.sub_name}"
        return self.name

    def effective_tax_rate(self, default: float) -> float:
        """Product tax rate, falling back to ``default``."""
        return self.tva if self.tva is not None else default
