# snapsteam/services/form.py
"""
입력 폼 상태 전이 (pure functions).

모든 함수는 기존 InputState를 변경하지 않고 새 InputState를 반환한다.
- change_fluid_state: 전체 교체 (첫 번째 허용 모드, 값 초기화, 기본 단위)
- change_mode:        유체 상태 유지, 값 초기화, 기본 단위
- edit_value / edit_unit: 해당 필드 하나만 변경
"""
from __future__ import annotations

from typing import Literal

from pydantic import ValidationError

from snapsteam.core.errors import InvalidTransitionError
from snapsteam.schemas.common import FluidState, InputMode
from snapsteam.schemas.steam import InputState
from snapsteam.services.modes import default_mode, mode_config, permitted_modes

ValueField = Literal["value1", "value2"]
UnitField = Literal["unit1", "unit2"]


def default_input_state() -> InputState:
    return InputState()


def _rebuild(state: InputState, **update) -> InputState:
    # model_copy는 validator를 타지 않으므로 항상 재검증
    data = state.model_dump()
    data.update(update)
    try:
        return InputState.model_validate(data)
    except ValidationError as e:
        raise InvalidTransitionError(
            "invalid input state", detail=[err.get("msg") for err in e.errors()]
        ) from e


def change_fluid_state(state: InputState, fluid_state: FluidState) -> InputState:
    try:
        fs = FluidState(fluid_state)
    except ValueError as e:
        raise InvalidTransitionError(f"unknown fluid state: {fluid_state!r}") from e

    new_mode = default_mode(fs)
    cfg = mode_config(new_mode)
    return _rebuild(
        state,
        fluid_state=fs,
        mode=new_mode,
        value1="",
        value2="",
        unit1=cfg.default_unit1,
        unit2=cfg.default_unit2,
    )


def change_mode(state: InputState, mode: InputMode) -> InputState:
    try:
        new_mode = InputMode(mode)
    except ValueError as e:
        raise InvalidTransitionError(f"unknown input mode: {mode!r}") from e

    if new_mode not in permitted_modes(state.fluid_state):
        raise InvalidTransitionError(
            f"mode '{new_mode.value}' is not available for fluid state '{state.fluid_state.value}'",
            detail={"availableModes": [m.value for m in permitted_modes(state.fluid_state)]},
        )

    cfg = mode_config(new_mode)
    return _rebuild(
        state,
        mode=new_mode,
        value1="",
        value2="",
        unit1=cfg.default_unit1,
        unit2=cfg.default_unit2,
    )


def edit_value(state: InputState, field: ValueField, value: str) -> InputState:
    if field not in ("value1", "value2"):
        raise InvalidTransitionError(f"unknown value field: {field!r}")
    return _rebuild(state, **{field: "" if value is None else str(value)})


def edit_unit(state: InputState, field: UnitField, unit: str) -> InputState:
    if field not in ("unit1", "unit2"):
        raise InvalidTransitionError(f"unknown unit field: {field!r}")

    cfg = mode_config(state.mode)
    allowed = cfg.units1 if field == "unit1" else cfg.units2
    if unit not in allowed:
        raise InvalidTransitionError(
            f"unit '{unit}' is not available for {field} in mode '{state.mode.value}'",
            detail={"availableUnits": list(allowed)},
        )
    return _rebuild(state, **{field: unit})


def has_values(state: InputState) -> bool:
    return bool(state.value1.strip()) and bool(state.value2.strip())


def can_calculate(state: InputState, loading: bool) -> bool:
    return has_values(state) and not loading


def describe_request(state: InputState) -> str:
    """외부 물성 계산기에 넘길 상태 설명 문자열"""
    return (
        f"Fluid State: {state.fluid_state.value}, "
        f"Input 1: {state.value1} {state.unit1}, "
        f"Input 2: {state.value2} {state.unit2} "
        f"({state.mode.value})"
    )
