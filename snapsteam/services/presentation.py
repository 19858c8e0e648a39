# snapsteam/services/presentation.py
from __future__ import annotations

from typing import Optional

from snapsteam.schemas.common import QUALITY_UNIT, PhysicalQuantity
from snapsteam.schemas.steam import CalculationResult, DisplayUnits, ResultRow, ResultView
from snapsteam.services.units import convert, units_for

NO_RESULT_PLACEHOLDER = (
    "Select fluid state and input variables on the left panel, then click Calculate."
)

QUALITY_SUBCOOLED = -1.0
QUALITY_SUPERHEATED = 2.0
QUALITY_SUBCOOLED_LABEL = "N/A (Subcooled)"
QUALITY_SUPERHEATED_LABEL = "N/A (Superheated)"


def format_value(value: float) -> str:
    """|v| < 1e-4 또는 |v| > 1e4 이면 지수 표기, 아니면 소수점 5자리"""
    v = float(value)
    if abs(v) < 1e-4 or abs(v) > 1e4:
        # 지수부 앞자리 0 제거: 5.00000e-05 -> 5.00000e-5
        mantissa, exp = f"{v:.5e}".split("e")
        return f"{mantissa}e{int(exp):+d}"
    return f"{v:.5f}"


def format_quality(quality: Optional[float]) -> str:
    if quality is None:
        return "-"
    q = float(quality)
    if 0.0 <= q <= 1.0:
        return f"{q:.4f}"
    if q == QUALITY_SUBCOOLED:
        return QUALITY_SUBCOOLED_LABEL
    if q == QUALITY_SUPERHEATED:
        return QUALITY_SUPERHEATED_LABEL
    return f"{q:.2f}"


def _row(
    label: str,
    base_value: float,
    quantity: PhysicalQuantity,
    unit,
    description: Optional[str] = None,
) -> ResultRow:
    value = convert(quantity, base_value, unit)
    return ResultRow(
        label=label,
        value=value,
        display=format_value(value),
        unit=unit.value,
        available_units=units_for(quantity),
        description=description,
    )


def render_result(result: CalculationResult, display_units: DisplayUnits) -> ResultView:
    """저장된 base unit 값을 표시 단위로 변환해 행 목록을 만든다 (원본 값은 변경 없음)."""
    p = result.properties
    du = display_units

    rows = [
        _row("Pressure (P)", p.pressure, PhysicalQuantity.PRESSURE, du.pressure),
        _row("Temperature (T)", p.temperature, PhysicalQuantity.TEMPERATURE, du.temperature),
        _row(
            "Specific Volume (v)",
            p.specific_volume,
            PhysicalQuantity.VOLUME,
            du.volume,
            "Volume per unit mass",
        ),
        _row("Internal Energy (u)", p.internal_energy, PhysicalQuantity.ENERGY, du.energy),
        _row(
            "Enthalpy (h)",
            p.enthalpy,
            PhysicalQuantity.ENERGY,
            du.energy,
            "Total heat content",
        ),
        _row(
            "Entropy (s)",
            p.entropy,
            PhysicalQuantity.ENTROPY,
            du.entropy,
            "Measure of disorder",
        ),
        ResultRow(
            label="Quality (x)",
            value=p.quality,
            display=format_quality(p.quality),
            unit=QUALITY_UNIT,
            description="Mass fraction of vapor",
        ),
    ]
    return ResultView(phase=p.phase, description=result.description, rows=rows)
