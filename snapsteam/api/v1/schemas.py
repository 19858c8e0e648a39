# snapsteam/api/v1/schemas.py
# (Barrel File: 엔드포인트에서 사용하는 스키마를 한 곳에서 다시 내보냅니다)

from snapsteam.schemas.common import (
    AppBaseModel,
    FluidState,
    InputMode,
    PhysicalQuantity,
)

from snapsteam.schemas.steam import (
    InputState,
    SteamProperties,
    CalculationResult,
    DisplayUnits,
    ResultRow,
    ResultView,
    ModeConfigOut,
    FluidStateOut,
    FluidStateChangeIn,
    ModeChangeIn,
    InputPatchIn,
    DisplayUnitsPatchIn,
    SessionView,
    ConvertIn,
    ConvertOut,
)
