# snapsteam/api/v1/endpoints/sessions.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from loguru import logger

from snapsteam.api.v1.deps import get_resolver, get_session_store
from snapsteam.api.v1.schemas import (
    DisplayUnitsPatchIn,
    FluidStateChangeIn,
    InputPatchIn,
    ModeChangeIn,
    SessionView,
)
from snapsteam.core.config import settings
from snapsteam.services import form
from snapsteam.services.resolver import PropertyResolver
from snapsteam.services.session import SessionStore, calculate, to_view

# 모든 핸들러는 async: 세션 상태는 이벤트 루프 한 곳에서만 변경된다.
router = APIRouter(tags=["sessions"])


@router.post("", response_model=SessionView, status_code=201)
async def create_session(store: SessionStore = Depends(get_session_store)):
    return to_view(store.create())


@router.get("/{session_id}", response_model=SessionView)
async def get_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    return to_view(store.get(session_id))


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    store.delete(session_id)
    return Response(status_code=204)


# -----------------------------------------------------------------------------
# Input Form
# -----------------------------------------------------------------------------
@router.put("/{session_id}/fluid-state", response_model=SessionView)
async def change_fluid_state(
    session_id: str,
    payload: FluidStateChangeIn,
    store: SessionStore = Depends(get_session_store),
):
    session = store.get(session_id)
    session.input = form.change_fluid_state(session.input, payload.fluid_state)
    return to_view(session)


@router.put("/{session_id}/mode", response_model=SessionView)
async def change_mode(
    session_id: str,
    payload: ModeChangeIn,
    store: SessionStore = Depends(get_session_store),
):
    session = store.get(session_id)
    session.input = form.change_mode(session.input, payload.mode)
    return to_view(session)


@router.patch("/{session_id}/input", response_model=SessionView)
async def patch_input(
    session_id: str,
    payload: InputPatchIn,
    store: SessionStore = Depends(get_session_store),
):
    session = store.get(session_id)

    # 필드 단위로 순서대로 적용, 하나라도 실패하면 세션 상태는 그대로
    new_state = session.input
    for field in ("value1", "value2"):
        value = getattr(payload, field)
        if value is not None:
            new_state = form.edit_value(new_state, field, value)
    for field in ("unit1", "unit2"):
        unit = getattr(payload, field)
        if unit is not None:
            new_state = form.edit_unit(new_state, field, unit)

    session.input = new_state
    return to_view(session)


# -----------------------------------------------------------------------------
# Result Presentation
# -----------------------------------------------------------------------------
@router.patch("/{session_id}/display-units", response_model=SessionView)
async def patch_display_units(
    session_id: str,
    payload: DisplayUnitsPatchIn,
    store: SessionStore = Depends(get_session_store),
):
    session = store.get(session_id)
    update = payload.model_dump(exclude_none=True)
    if update:
        session.display_units = session.display_units.model_copy(update=update)
    return to_view(session)


# -----------------------------------------------------------------------------
# Calculation
# -----------------------------------------------------------------------------
@router.post("/{session_id}/calculate", response_model=SessionView)
async def calculate_session(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
    resolver: PropertyResolver = Depends(get_resolver),
):
    session = store.get(session_id)
    logger.info(f"🚀 [Calculation Start] session={session_id}")
    await calculate(session, resolver, timeout_s=settings.RESOLVER_TIMEOUT_S)
    return to_view(session)
