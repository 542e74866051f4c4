from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from booking.core.config import settings
from booking.schemas.cost import CostBreakdown


@dataclass(frozen=True)
class PricingRates:
    per_km_rate: Decimal
    shipping_flat: Decimal
    tax_rate: Decimal

    @classmethod
    def from_settings(cls) -> "PricingRates":
        return cls(
            per_km_rate=settings.PER_KM_RATE,
            shipping_flat=settings.SHIPPING_FLAT,
            tax_rate=settings.TAX_RATE,
        )


def _as_decimal(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def compute_cost(vehicle_rate, distance_km, rates: Optional[PricingRates] = None) -> CostBreakdown:
    """Price a move from the vehicle rate and trip distance.

    Inputs are expected to be non-negative numbers already; callers coerce
    missing or malformed values to 0 before getting here. The total is always
    the plain sum of the four components.
    """
    rates = rates or PricingRates.from_settings()

    base_price = _as_decimal(vehicle_rate)
    distance_price = _as_decimal(distance_km) * rates.per_km_rate
    tax = (base_price + distance_price) * rates.tax_rate

    return CostBreakdown(
        base_price=base_price,
        distance_price=distance_price,
        shipping_cost=rates.shipping_flat,
        tax=tax,
    )
