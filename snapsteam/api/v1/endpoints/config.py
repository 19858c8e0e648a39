# snapsteam/api/v1/endpoints/config.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter

from snapsteam.api.v1.schemas import FluidState, FluidStateOut, InputMode, ModeConfigOut
from snapsteam.services.modes import fluid_state_hint, mode_config, permitted_modes

router = APIRouter(tags=["config"])


def _mode_out(mode: InputMode) -> ModeConfigOut:
    cfg = mode_config(mode)
    return ModeConfigOut(
        mode=mode,
        label1=cfg.label1,
        label2=cfg.label2,
        default_unit1=cfg.default_unit1,
        default_unit2=cfg.default_unit2,
        units1=list(cfg.units1),
        units2=list(cfg.units2),
        unit1_locked=cfg.unit1_locked,
        unit2_locked=cfg.unit2_locked,
    )


@router.get("/fluid-states", response_model=List[FluidStateOut])
def list_fluid_states():
    return [
        FluidStateOut(fluid_state=fs, hint=fluid_state_hint(fs), modes=permitted_modes(fs))
        for fs in FluidState
    ]


@router.get("/modes", response_model=List[ModeConfigOut])
def list_modes():
    return [_mode_out(m) for m in InputMode]


@router.get("/modes/{mode}", response_model=ModeConfigOut)
def get_mode(mode: InputMode):
    return _mode_out(mode)
