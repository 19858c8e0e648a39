# snapsteam/schemas/common.py
from enum import Enum
from pydantic import BaseModel, ConfigDict


class AppBaseModel(BaseModel):
    """모든 모델의 부모 클래스: V2 설정 적용"""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        from_attributes=True,
    )


class FluidState(str, Enum):
    SUBCOOLED_SUPERHEATED = "Subcooled/Superheated"
    SATURATED = "Saturated"


class InputMode(str, Enum):
    PT = "Pressure & Temperature"
    PH = "Pressure & Enthalpy"
    PS = "Pressure & Entropy"
    PX = "Pressure & Quality"
    TX = "Temperature & Quality"
    TH = "Temperature & Enthalpy"


class PhysicalQuantity(str, Enum):
    PRESSURE = "pressure"
    TEMPERATURE = "temperature"
    VOLUME = "volume"
    ENERGY = "energy"
    ENTROPY = "entropy"


# =============================================================================
# Units (첫 번째 멤버가 base unit)
# =============================================================================
class PressureUnit(str, Enum):
    MPA = "MPa"
    BAR = "bar"
    KPA = "kPa"
    ATM = "atm"
    PSIA = "psia"


class TemperatureUnit(str, Enum):
    C = "°C"
    K = "K"
    F = "°F"
    R = "°R"


class VolumeUnit(str, Enum):
    M3_KG = "m³/kg"
    FT3_LB = "ft³/lb"


class EnergyUnit(str, Enum):
    KJ_KG = "kJ/kg"
    BTU_LB = "Btu/lb"


class EntropyUnit(str, Enum):
    KJ_KGK = "kJ/(kg·K)"
    BTU_LBR = "Btu/(lb·°R)"


# 건도(quality)는 무차원: 선택 불가능한 단일 합성 단위
QUALITY_UNIT = "-"
