# snapsteam/api/v1/endpoints/units.py
from __future__ import annotations

from typing import Dict, List

from fastapi import APIRouter, Depends

from snapsteam.api.v1.schemas import ConvertIn, ConvertOut, DisplayUnits
from snapsteam.schemas.common import PhysicalQuantity
from snapsteam.services.units import base_unit, compute_conversions, convert, to_base, units_for

router = APIRouter(tags=["units"])


@router.get("", response_model=Dict[str, List[str]])
def list_units():
    """물성 그룹별 선택 가능 단위 (첫 번째가 base unit)"""
    return {q.value: units_for(q) for q in PhysicalQuantity}


@router.get("/conversions", response_model=dict)
def get_conversions(display: DisplayUnits = Depends()):
    return compute_conversions(display)


@router.post("/convert", response_model=ConvertOut)
def convert_value(payload: ConvertIn):
    if payload.direction == "to_base":
        value = to_base(payload.quantity, payload.value, payload.unit)
    else:
        value = convert(payload.quantity, payload.value, payload.unit)
    return ConvertOut(
        quantity=payload.quantity,
        base_unit=base_unit(payload.quantity),
        unit=payload.unit,
        input=payload.value,
        value=value,
    )
