"""Cost quote endpoint with Redis caching"""
import json
import logging
from fastapi import APIRouter

from booking.schemas.cost import CostBreakdown, CostRequest, QuoteResponse
from booking.services.pricing import compute_cost
from booking.core.redis import get_redis
from booking.core.config import settings
from booking.core.metrics import quote_cache_hits, quote_cache_misses
from booking.utils.hashing import payload_hash

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/quotes", tags=["quotes"])


def _generate_cache_key(req: CostRequest) -> str:
    # Rates are part of the key so a config change never serves stale prices.
    params = {
        **req.model_dump(mode="json"),
        "per_km_rate": str(settings.PER_KM_RATE),
        "shipping_flat": str(settings.SHIPPING_FLAT),
        "tax_rate": str(settings.TAX_RATE),
    }
    return f"price:{payload_hash(params)}"


def _quote(breakdown: CostBreakdown) -> QuoteResponse:
    return QuoteResponse(currency=settings.CURRENCY, breakdown=breakdown, display=breakdown.display())


@router.post("/calc", response_model=QuoteResponse)
async def calc_quote(req: CostRequest):

    cache_key = _generate_cache_key(req)
    redis = get_redis()

    if redis is not None:
        try:
            cached = await redis.get(cache_key)
            if cached:
                quote_cache_hits.inc()
                return _quote(CostBreakdown.model_validate(json.loads(cached)))
        except Exception as e:
            logger.warning(f"Cache retrieval failed: {e}")

    quote_cache_misses.inc()
    result = compute_cost(req.vehicle_rate, req.distance_km)

    if redis is not None:
        try:
            await redis.set(
                cache_key,
                result.model_dump_json(),
                ex=settings.PRICE_CACHE_TTL
            )
        except Exception as e:
            logger.warning(f"Cache write failed: {e}")

    return _quote(result)
