# snapsteam/services/units.py
#
# Base units (저장/계산 기준):
#   pressure: MPa | temperature: °C | volume: m³/kg | energy: kJ/kg | entropy: kJ/(kg·K)
#
# 모든 변환은 display = value * scale + offset 형태의 affine 변환.
# 알 수 없는 단위는 항등 변환(값 그대로 반환).

from __future__ import annotations

from typing import Dict, List, Type

from loguru import logger

from snapsteam.schemas.common import (
    EnergyUnit,
    EntropyUnit,
    PhysicalQuantity,
    PressureUnit,
    TemperatureUnit,
    VolumeUnit,
)


def _lin(scale: float, offset: float = 0.0) -> dict:
    return {"scale": float(scale), "offset": float(offset)}


_IDENTITY = _lin(1.0)

UNIT_ENUMS: Dict[PhysicalQuantity, Type] = {
    PhysicalQuantity.PRESSURE: PressureUnit,
    PhysicalQuantity.TEMPERATURE: TemperatureUnit,
    PhysicalQuantity.VOLUME: VolumeUnit,
    PhysicalQuantity.ENERGY: EnergyUnit,
    PhysicalQuantity.ENTROPY: EntropyUnit,
}

# base unit -> display unit
TO_DISPLAY: Dict[PhysicalQuantity, Dict[str, dict]] = {
    PhysicalQuantity.PRESSURE: {
        PressureUnit.MPA.value: _lin(1.0),
        PressureUnit.BAR.value: _lin(10.0),
        PressureUnit.KPA.value: _lin(1000.0),
        PressureUnit.ATM.value: _lin(9.86923),
        PressureUnit.PSIA.value: _lin(145.038),
    },
    PhysicalQuantity.TEMPERATURE: {
        TemperatureUnit.C.value: _lin(1.0),
        TemperatureUnit.K.value: _lin(1.0, 273.15),
        TemperatureUnit.F.value: _lin(9 / 5, 32.0),
        TemperatureUnit.R.value: _lin(1.8, 273.15 * 1.8),
    },
    PhysicalQuantity.VOLUME: {
        VolumeUnit.M3_KG.value: _lin(1.0),
        VolumeUnit.FT3_LB.value: _lin(16.0185),
    },
    PhysicalQuantity.ENERGY: {
        EnergyUnit.KJ_KG.value: _lin(1.0),
        EnergyUnit.BTU_LB.value: _lin(1 / 2.326),
    },
    PhysicalQuantity.ENTROPY: {
        EntropyUnit.KJ_KGK.value: _lin(1.0),
        EntropyUnit.BTU_LBR.value: _lin(1 / 4.1868),
    },
}


def _unit_key(unit) -> str:
    return unit.value if hasattr(unit, "value") else str(unit)


def _factor(quantity: PhysicalQuantity, unit) -> dict:
    q = PhysicalQuantity(quantity)
    key = _unit_key(unit)
    cv = TO_DISPLAY[q].get(key)
    if cv is None:
        logger.debug(f"unknown {q.value} unit '{key}' -> identity conversion")
        return _IDENTITY
    return cv


def base_unit(quantity: PhysicalQuantity) -> str:
    return list(UNIT_ENUMS[PhysicalQuantity(quantity)])[0].value


def units_for(quantity: PhysicalQuantity) -> List[str]:
    return [u.value for u in UNIT_ENUMS[PhysicalQuantity(quantity)]]


# =============================================================================
# Generic
# =============================================================================
def convert(quantity: PhysicalQuantity, value: float, to_unit) -> float:
    """base unit 값 -> to_unit 값"""
    cv = _factor(quantity, to_unit)
    return float(value) * cv["scale"] + cv["offset"]


def to_base(quantity: PhysicalQuantity, value: float, from_unit) -> float:
    """from_unit 값 -> base unit 값 (convert의 역변환)"""
    cv = _factor(quantity, from_unit)
    return (float(value) - cv["offset"]) / cv["scale"]


# =============================================================================
# Per-quantity helpers
# =============================================================================
def convert_pressure(value: float, to_unit) -> float:
    return convert(PhysicalQuantity.PRESSURE, value, to_unit)


def convert_temperature(value: float, to_unit) -> float:
    return convert(PhysicalQuantity.TEMPERATURE, value, to_unit)


def convert_volume(value: float, to_unit) -> float:
    return convert(PhysicalQuantity.VOLUME, value, to_unit)


def convert_energy(value: float, to_unit) -> float:
    return convert(PhysicalQuantity.ENERGY, value, to_unit)


def convert_entropy(value: float, to_unit) -> float:
    return convert(PhysicalQuantity.ENTROPY, value, to_unit)


def pressure_to_base(value: float, from_unit) -> float:
    return to_base(PhysicalQuantity.PRESSURE, value, from_unit)


def temperature_to_base(value: float, from_unit) -> float:
    return to_base(PhysicalQuantity.TEMPERATURE, value, from_unit)


def volume_to_base(value: float, from_unit) -> float:
    return to_base(PhysicalQuantity.VOLUME, value, from_unit)


def energy_to_base(value: float, from_unit) -> float:
    return to_base(PhysicalQuantity.ENERGY, value, from_unit)


def entropy_to_base(value: float, from_unit) -> float:
    return to_base(PhysicalQuantity.ENTROPY, value, from_unit)


# =============================================================================
# Display conversion table
# =============================================================================
def compute_conversions(display_units) -> dict:
    """
    DisplayUnits(또는 같은 키를 가진 dict) -> 물성 그룹별 변환 계수.

    {"pressure": {"engine": "MPa", "display": "bar",
                  "to_display": {"scale", "offset"}, "from_display": {...}}, ...}
    """
    if hasattr(display_units, "model_dump"):
        selected = display_units.model_dump()
    else:
        selected = dict(display_units or {})

    res: dict = {}
    for q in PhysicalQuantity:
        unit = _unit_key(selected.get(q.value) or base_unit(q))
        cv = _factor(q, unit)
        res[q.value] = {
            "engine": base_unit(q),
            "display": unit,
            "to_display": dict(cv),
            "from_display": _lin(1 / cv["scale"], -cv["offset"] / cv["scale"]),
        }
    return res
