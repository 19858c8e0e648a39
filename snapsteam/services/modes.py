# snapsteam/services/modes.py
# 유체 상태(FluidState) → 입력 모드(InputMode) → 라벨/기본 단위/단위 목록 정적 테이블
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from snapsteam.schemas.common import (
    QUALITY_UNIT,
    EnergyUnit,
    EntropyUnit,
    FluidState,
    InputMode,
    PressureUnit,
    TemperatureUnit,
)

_PRESSURE_UNITS: Tuple[str, ...] = tuple(u.value for u in PressureUnit)
_TEMPERATURE_UNITS: Tuple[str, ...] = tuple(u.value for u in TemperatureUnit)
_ENERGY_UNITS: Tuple[str, ...] = tuple(u.value for u in EnergyUnit)
_ENTROPY_UNITS: Tuple[str, ...] = tuple(u.value for u in EntropyUnit)
_QUALITY_UNITS: Tuple[str, ...] = (QUALITY_UNIT,)


@dataclass(frozen=True)
class ModeConfig:
    label1: str
    label2: str
    default_unit1: str
    default_unit2: str
    units1: Tuple[str, ...]
    units2: Tuple[str, ...]

    @property
    def unit1_locked(self) -> bool:
        return len(self.units1) == 1

    @property
    def unit2_locked(self) -> bool:
        return len(self.units2) == 1


# 첫 번째 모드가 유체 상태 변경 시의 기본 모드
FLUID_STATE_MODES: Dict[FluidState, Tuple[InputMode, ...]] = {
    FluidState.SUBCOOLED_SUPERHEATED: (
        InputMode.PT,
        InputMode.PH,
        InputMode.PS,
        InputMode.TH,
    ),
    FluidState.SATURATED: (
        InputMode.PX,
        InputMode.TX,
    ),
}

FLUID_STATE_HINTS: Dict[FluidState, str] = {
    FluidState.SUBCOOLED_SUPERHEATED: "For subcooled liquid or superheated steam regions.",
    FluidState.SATURATED: "For saturated liquid/vapor mixtures (inside the vapor dome).",
}

MODE_CONFIG: Dict[InputMode, ModeConfig] = {
    InputMode.PT: ModeConfig(
        label1="Pressure",
        label2="Temperature",
        default_unit1=PressureUnit.MPA.value,
        default_unit2=TemperatureUnit.C.value,
        units1=_PRESSURE_UNITS,
        units2=_TEMPERATURE_UNITS,
    ),
    InputMode.PH: ModeConfig(
        label1="Pressure",
        label2="Enthalpy",
        default_unit1=PressureUnit.MPA.value,
        default_unit2=EnergyUnit.KJ_KG.value,
        units1=_PRESSURE_UNITS,
        units2=_ENERGY_UNITS,
    ),
    InputMode.PS: ModeConfig(
        label1="Pressure",
        label2="Entropy",
        default_unit1=PressureUnit.MPA.value,
        default_unit2=EntropyUnit.KJ_KGK.value,
        units1=_PRESSURE_UNITS,
        units2=_ENTROPY_UNITS,
    ),
    InputMode.PX: ModeConfig(
        label1="Pressure (Saturation)",
        label2="Quality (x)",
        default_unit1=PressureUnit.MPA.value,
        default_unit2=QUALITY_UNIT,
        units1=_PRESSURE_UNITS,
        units2=_QUALITY_UNITS,
    ),
    InputMode.TX: ModeConfig(
        label1="Temperature (Saturation)",
        label2="Quality (x)",
        default_unit1=TemperatureUnit.C.value,
        default_unit2=QUALITY_UNIT,
        units1=_TEMPERATURE_UNITS,
        units2=_QUALITY_UNITS,
    ),
    InputMode.TH: ModeConfig(
        label1="Temperature",
        label2="Enthalpy",
        default_unit1=TemperatureUnit.C.value,
        default_unit2=EnergyUnit.KJ_KG.value,
        units1=_TEMPERATURE_UNITS,
        units2=_ENERGY_UNITS,
    ),
}


def _check_table() -> None:
    """테이블 누락은 import 시점에 바로 실패시킨다."""
    missing_states = [s for s in FluidState if not FLUID_STATE_MODES.get(s)]
    missing_hints = [s for s in FluidState if s not in FLUID_STATE_HINTS]
    missing_modes = [m for m in InputMode if m not in MODE_CONFIG]
    if missing_states or missing_hints or missing_modes:
        raise RuntimeError(
            f"incomplete mode table: states={missing_states} hints={missing_hints} modes={missing_modes}"
        )
    for m, cfg in MODE_CONFIG.items():
        if cfg.default_unit1 not in cfg.units1 or cfg.default_unit2 not in cfg.units2:
            raise RuntimeError(f"default unit of {m.value} is not in its unit list")


_check_table()


def permitted_modes(fluid_state: FluidState) -> List[InputMode]:
    return list(FLUID_STATE_MODES[FluidState(fluid_state)])


def default_mode(fluid_state: FluidState) -> InputMode:
    return FLUID_STATE_MODES[FluidState(fluid_state)][0]


def mode_config(mode: InputMode) -> ModeConfig:
    return MODE_CONFIG[InputMode(mode)]


def fluid_state_hint(fluid_state: FluidState) -> str:
    return FLUID_STATE_HINTS[FluidState(fluid_state)]
