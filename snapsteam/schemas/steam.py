# snapsteam/schemas/steam.py
# =============================================================================
# SnapSteam Schemas (Pydantic v2)
#
# Key Policies:
# - 모든 물성값은 base unit(MPa, °C, m³/kg, kJ/kg, kJ/(kg·K))으로 저장한다.
#   표시 단위 변환은 presentation 단계에서만 수행.
# - InputState/SteamProperties/CalculationResult는 불변(frozen). 상태 전이는 항상 새 객체.
# - JSON 필드명은 camelCase(alias), 입력은 snake_case도 허용(populate_by_name).
# =============================================================================

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import ConfigDict, Field, model_validator

from snapsteam.schemas.common import (
    AppBaseModel,
    EnergyUnit,
    EntropyUnit,
    FluidState,
    InputMode,
    PhysicalQuantity,
    PressureUnit,
    TemperatureUnit,
    VolumeUnit,
)
from snapsteam.services.modes import mode_config, permitted_modes


# =============================================================================
# Input State
# =============================================================================
class InputState(AppBaseModel):
    model_config = ConfigDict(frozen=True)

    fluid_state: FluidState = Field(
        default=FluidState.SUBCOOLED_SUPERHEATED, alias="fluidState"
    )
    mode: InputMode = InputMode.PT
    value1: str = "0.101325"  # 1 atm (MPa)
    value2: str = "100"  # 100 °C
    unit1: str = PressureUnit.MPA.value
    unit2: str = TemperatureUnit.C.value

    @model_validator(mode="after")
    def _check_mode_and_units(self) -> "InputState":
        if self.mode not in permitted_modes(self.fluid_state):
            raise ValueError(
                f"mode '{self.mode.value}' is not permitted for fluid state '{self.fluid_state.value}'"
            )
        cfg = mode_config(self.mode)
        if self.unit1 not in cfg.units1:
            raise ValueError(f"unit1 '{self.unit1}' is not valid for mode '{self.mode.value}'")
        if self.unit2 not in cfg.units2:
            raise ValueError(f"unit2 '{self.unit2}' is not valid for mode '{self.mode.value}'")
        return self


# =============================================================================
# Resolver Output
# =============================================================================
class SteamProperties(AppBaseModel):
    model_config = ConfigDict(frozen=True)

    pressure: float = Field(..., description="Pressure [MPa]")
    temperature: float = Field(..., description="Temperature [°C]")
    specific_volume: float = Field(
        ..., alias="specificVolume", description="Specific Volume [m³/kg]"
    )
    internal_energy: float = Field(
        ..., alias="internalEnergy", description="Internal Energy [kJ/kg]"
    )
    enthalpy: float = Field(..., description="Enthalpy [kJ/kg]")
    entropy: float = Field(..., description="Entropy [kJ/(kg·K)]")
    quality: Optional[float] = Field(
        default=None,
        description="Vapor quality (x). -1 = subcooled, 2 = superheated, 0-1 = saturated",
    )
    phase: str


class CalculationResult(AppBaseModel):
    model_config = ConfigDict(frozen=True)

    properties: SteamProperties
    description: str = ""


# =============================================================================
# Presentation
# =============================================================================
class DisplayUnits(AppBaseModel):
    """결과 표시 단위 (물성 그룹별 독립 선택, energy는 u/h 공용)"""

    model_config = ConfigDict(frozen=True)

    pressure: PressureUnit = PressureUnit.MPA
    temperature: TemperatureUnit = TemperatureUnit.C
    volume: VolumeUnit = VolumeUnit.M3_KG
    energy: EnergyUnit = EnergyUnit.KJ_KG
    entropy: EntropyUnit = EntropyUnit.KJ_KGK


class ResultRow(AppBaseModel):
    label: str
    value: Optional[float] = None
    display: str
    unit: str
    available_units: List[str] = Field(default_factory=list, alias="availableUnits")
    description: Optional[str] = None


class ResultView(AppBaseModel):
    phase: str
    description: str
    rows: List[ResultRow]


# =============================================================================
# Config Table Output
# =============================================================================
class ModeConfigOut(AppBaseModel):
    mode: InputMode
    label1: str
    label2: str
    default_unit1: str = Field(..., alias="defaultUnit1")
    default_unit2: str = Field(..., alias="defaultUnit2")
    units1: List[str]
    units2: List[str]
    unit1_locked: bool = Field(..., alias="unit1Locked")
    unit2_locked: bool = Field(..., alias="unit2Locked")


class FluidStateOut(AppBaseModel):
    fluid_state: FluidState = Field(..., alias="fluidState")
    hint: str
    modes: List[InputMode]


# =============================================================================
# Session API
# =============================================================================
class FluidStateChangeIn(AppBaseModel):
    fluid_state: FluidState = Field(..., alias="fluidState")


class ModeChangeIn(AppBaseModel):
    mode: InputMode


class InputPatchIn(AppBaseModel):
    """부분 업데이트: None 필드는 유지"""

    value1: Optional[str] = None
    value2: Optional[str] = None
    unit1: Optional[str] = None
    unit2: Optional[str] = None


class DisplayUnitsPatchIn(AppBaseModel):
    pressure: Optional[PressureUnit] = None
    temperature: Optional[TemperatureUnit] = None
    volume: Optional[VolumeUnit] = None
    energy: Optional[EnergyUnit] = None
    entropy: Optional[EntropyUnit] = None


class SessionView(AppBaseModel):
    id: str
    created_at: datetime = Field(..., alias="createdAt")
    input: InputState
    config: ModeConfigOut
    available_modes: List[InputMode] = Field(..., alias="availableModes")
    fluid_state_hint: str = Field(..., alias="fluidStateHint")
    can_calculate: bool = Field(..., alias="canCalculate")
    loading: bool
    error: Optional[str] = None
    error_hint: Optional[str] = Field(default=None, alias="errorHint")
    display_units: DisplayUnits = Field(..., alias="displayUnits")
    result: Optional[ResultView] = None
    placeholder: Optional[str] = None


# =============================================================================
# Units API
# =============================================================================
class ConvertIn(AppBaseModel):
    quantity: PhysicalQuantity
    value: float
    unit: str
    direction: Literal["to_display", "to_base"] = "to_display"


class ConvertOut(AppBaseModel):
    quantity: PhysicalQuantity
    base_unit: str = Field(..., alias="baseUnit")
    unit: str
    input: float
    value: float
