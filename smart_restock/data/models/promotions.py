from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

PromotionScope = Literal["brand", "product", "category"]
DiscountType = Literal["percentage", "fixed_amount", "buy_x_get_y", "free_shipping"]


class Promotion(BaseModel):
    """A supplier's time-bounded discount offer."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique promotion identifier")
    supplier_id: str = Field(description="Supplier offering the promotion")
    name: str = Field(default="", description="Display name of the promotion")
    scope: PromotionScope = Field(default="product", description="What the promotion targets")
    discount_type: DiscountType = Field(default="percentage", description="How the discount is applied")
    discount_value: Decimal = Field(description="Percentage points or flat amount, depending on discount_type")
    minimum_quantity: int = Field(default=1, description="Minimum units per order line")
    start_date: date = Field(description="First day the promotion applies")
    end_date: date = Field(description="Last day the promotion applies")
    max_usage: Optional[int] = Field(default=None, description="Usage cap, unlimited when unset")
    current_usage: int = Field(default=0, description="Times the promotion has been redeemed")
    product_id: Optional[str] = Field(default=None, description="Target product for product-scoped promotions")
    variant_id: Optional[str] = Field(default=None, description="Narrows a product promotion to one variant")
    brand_id: Optional[str] = Field(default=None, description="Target brand for brand-scoped promotions")
    category_id: Optional[str] = Field(default=None, description="Target category for category-scoped promotions")

    def is_valid_at(self, when: Union[date, datetime]) -> bool:
        """True when `when` falls inside the promotion window and usage is not exhausted."""
        day = when.date() if isinstance(when, datetime) else when
        if not (self.start_date <= day <= self.end_date):
            return False
        return self.max_usage is None or self.current_usage < self.max_usage
