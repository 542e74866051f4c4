from decimal import Decimal
from pydantic import BaseModel, ConfigDict, computed_field, field_validator

from booking.utils.money import ZERO, money, parse_amount


class CostRequest(BaseModel):
    vehicle_rate: Decimal = ZERO
    distance_km: Decimal = ZERO

    @field_validator("vehicle_rate", "distance_km", mode="before")
    @classmethod
    def _coerce(cls, value):
        return parse_amount(value)


class CostBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_price: Decimal
    distance_price: Decimal
    shipping_cost: Decimal
    tax: Decimal

    @computed_field
    @property
    def total_cost(self) -> Decimal:
        return self.base_price + self.distance_price + self.shipping_cost + self.tax

    @property
    def subtotal(self) -> Decimal:
        return self.base_price + self.distance_price

    def display(self) -> dict[str, str]:
        """Two-decimal strings for rendering; never fed back into arithmetic."""
        return {
            "base_price": str(money(self.base_price)),
            "distance_price": str(money(self.distance_price)),
            "shipping_cost": str(money(self.shipping_cost)),
            "tax": str(money(self.tax)),
            "total_cost": str(money(self.total_cost)),
        }


class QuoteResponse(BaseModel):
    currency: str
    breakdown: CostBreakdown
    display: dict[str, str]
