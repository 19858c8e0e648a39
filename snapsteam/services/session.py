# snapsteam/services/session.py
from __future__ import annotations

import asyncio
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from loguru import logger

from snapsteam.core.errors import (
    RESOLVER_ERRORS,
    CalculationInProgressError,
    CalculationNotReadyError,
    MissingCredentialError,
    ResolverInvocationError,
    ResolverTimeoutError,
    SessionNotFoundError,
)
from snapsteam.core.logger import session_logger
from snapsteam.schemas.steam import CalculationResult, DisplayUnits, InputState, SessionView
from snapsteam.services import form
from snapsteam.services.modes import fluid_state_hint, mode_config, permitted_modes
from snapsteam.services.presentation import NO_RESULT_PLACEHOLDER, render_result
from snapsteam.services.resolver import PropertyResolver

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred during calculation."

CREDENTIAL_HINT = (
    "Set an environment variable named API_KEY with your Gemini API Key "
    "(https://aistudio.google.com/app/apikey), then restart the server. "
    "Environment variables are only read at startup."
)


@dataclass
class SteamSession:
    """세션 단위 상태 컨텍스트 (입력 상태 + 결과 + 로딩/에러 플래그)"""

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    input: InputState = field(default_factory=form.default_input_state)
    result: Optional[CalculationResult] = None
    loading: bool = False
    error: Optional[str] = None
    error_hint: Optional[str] = None
    display_units: DisplayUnits = field(default_factory=DisplayUnits)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def can_calculate(self) -> bool:
        return form.can_calculate(self.input, self.loading)


def to_view(session: SteamSession) -> SessionView:
    cfg = mode_config(session.input.mode)
    return SessionView(
        id=session.id,
        created_at=session.created_at,
        input=session.input,
        config={
            "mode": session.input.mode,
            "label1": cfg.label1,
            "label2": cfg.label2,
            "default_unit1": cfg.default_unit1,
            "default_unit2": cfg.default_unit2,
            "units1": list(cfg.units1),
            "units2": list(cfg.units2),
            "unit1_locked": cfg.unit1_locked,
            "unit2_locked": cfg.unit2_locked,
        },
        available_modes=permitted_modes(session.input.fluid_state),
        fluid_state_hint=fluid_state_hint(session.input.fluid_state),
        can_calculate=session.can_calculate,
        loading=session.loading,
        error=session.error,
        error_hint=session.error_hint,
        display_units=session.display_units,
        result=(
            render_result(session.result, session.display_units)
            if session.result is not None
            else None
        ),
        placeholder=NO_RESULT_PLACEHOLDER if session.result is None else None,
    )


# =============================================================================
# Orchestration
# =============================================================================
async def calculate(
    session: SteamSession,
    resolver: PropertyResolver,
    *,
    timeout_s: float,
) -> CalculationResult:
    """
    단일 요청/응답. 재시도 없음.
    - 성공: session.result 교체
    - 실패: 이전 결과 유지, session.error 기록 후 예외 재전파
    """
    if session.loading:
        raise CalculationInProgressError("A calculation is already in progress.")
    if not form.has_values(session.input):
        raise CalculationNotReadyError("Both input values are required.")

    description = form.describe_request(session.input)
    session.loading = True
    session.error = None
    session.error_hint = None
    session_logger.info(f"[Calculate] session={session.id} | {description}")

    try:
        try:
            result = await asyncio.wait_for(resolver.resolve(description), timeout=timeout_s)
        except asyncio.TimeoutError as e:
            raise ResolverTimeoutError(
                f"Calculation did not finish within {timeout_s:g} seconds."
            ) from e
    except RESOLVER_ERRORS as e:
        session.error = e.message
        if isinstance(e, MissingCredentialError):
            session.error_hint = CREDENTIAL_HINT
        session_logger.warning(f"[Calculate] session={session.id} failed: {e.code} ({e.message})")
        raise
    except Exception as e:
        session.error = UNEXPECTED_ERROR_MESSAGE
        session_logger.exception(f"[Calculate] session={session.id} unexpected resolver error")
        raise ResolverInvocationError(UNEXPECTED_ERROR_MESSAGE, detail=type(e).__name__) from e
    finally:
        session.loading = False

    session.result = result
    session_logger.info(f"[Calculate] session={session.id} done: {result.properties.phase}")
    return result


# =============================================================================
# In-memory Session Store
# =============================================================================
class SessionStore:
    def __init__(self, max_sessions: int = 1000) -> None:
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, SteamSession]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self) -> SteamSession:
        session = SteamSession()
        self._sessions[session.id] = session
        while len(self._sessions) > self.max_sessions:
            evicted_id, _ = self._sessions.popitem(last=False)
            logger.debug(f"session evicted: {evicted_id}")
        session_logger.info(f"session created: {session.id}")
        return session

    def get(self, session_id: str) -> SteamSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(f"Session not found: {session_id}")
        return session

    def delete(self, session_id: str) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(f"Session not found: {session_id}")
        session_logger.info(f"session deleted: {session_id}")

    def clear(self) -> None:
        self._sessions.clear()
