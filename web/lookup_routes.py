"""
Lookup Routes - Area Units and City Lookup
"""

from __future__ import annotations

from typing import Literal, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from core.geo import nearby_cities, nearest_city
from core.units import AreaUnit, convert_area, convert_price_per_unit, price_per_sqft_from_unit
from utils.config import get_config


router = APIRouter(prefix="/api", tags=["lookup"])


# =============================================================================
# Request Models
# =============================================================================


class ConvertRequest(BaseModel):
    """Request body for unit conversion."""
    value: float
    from_unit: str
    to_unit: str
    kind: Literal["area", "price_per_unit"] = "area"


def _unit_or_400(value: str) -> AreaUnit:
    unit = AreaUnit.from_string(value)
    if unit is None:
        raise HTTPException(status_code=400, detail=f"Invalid area unit: {value}")
    return unit


# =============================================================================
# Units
# =============================================================================


@router.get("/units")
async def list_units():
    """Supported units and their size in square feet."""
    return {
        "units": [
            {"unit": unit.value, "label": unit.label, "sqft_per_unit": unit.factor}
            for unit in AreaUnit
        ]
    }


@router.post("/units/convert")
async def convert_units(request: ConvertRequest):
    """
    Convert an area, or a price per unit, between two units.

    A price per unit converts through the per-sqft price, scaling with the
    size of the target unit.
    """
    from_unit = _unit_or_400(request.from_unit)
    to_unit = _unit_or_400(request.to_unit)

    if request.kind == "area":
        result = convert_area(request.value, from_unit, to_unit)
    else:
        per_sqft = price_per_sqft_from_unit(request.value, from_unit)
        result = convert_price_per_unit(per_sqft, to_unit)

    return {
        "kind": request.kind,
        "value": request.value,
        "from_unit": from_unit.value,
        "to_unit": to_unit.value,
        "result": result,
    }


# =============================================================================
# Cities
# =============================================================================


@router.get("/cities/nearby")
async def cities_nearby(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    max_distance_km: Optional[float] = Query(None, gt=0),
):
    """Cities near a coordinate, closest first, plus the single nearest city."""
    radius = max_distance_km or get_config().nearby_radius_km
    nearest = nearest_city(lat, lon)
    return {
        "nearby": nearby_cities(lat, lon, radius),
        "nearest": nearest.name if nearest else None,
        "max_distance_km": radius,
    }
