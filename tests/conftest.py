# tests/conftest.py
from __future__ import annotations

import asyncio
import copy
import os
from dataclasses import dataclass, field
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from snapsteam.api.v1.deps import get_resolver, get_session_store
from snapsteam.main import app
from snapsteam.schemas.steam import CalculationResult
from snapsteam.services.resolver import PropertyResolver
from snapsteam.services.session import SessionStore


# -----------------------------------------------------------------------------
# E2E options (live Gemini)
# -----------------------------------------------------------------------------
def pytest_addoption(parser: pytest.Parser) -> None:
    g = parser.getgroup("snapsteam-e2e")
    g.addoption(
        "--e2e",
        action="store_true",
        default=False,
        help="Run E2E tests against the live Gemini API (marked with @pytest.mark.e2e).",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: List[pytest.Item]
) -> None:
    """Default: skip all @pytest.mark.e2e unless --e2e is passed and API_KEY is set."""
    if config.getoption("--e2e") and os.getenv("API_KEY"):
        return
    reason = (
        "E2E tests are disabled. Re-run with --e2e"
        if not config.getoption("--e2e")
        else "API_KEY is not set"
    )
    skip_e2e = pytest.mark.skip(reason=reason)
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


# -----------------------------------------------------------------------------
# Fake resolver
# -----------------------------------------------------------------------------
SUPERHEATED_1ATM_100C = {
    "properties": {
        "pressure": 0.101325,
        "temperature": 100.0,
        "specificVolume": 1.6729,
        "internalEnergy": 2506.5,
        "enthalpy": 2676.0,
        "entropy": 7.3549,
        "quality": 2,
        "phase": "Superheated Vapor",
    },
    "description": "Saturated vapor boundary at 1 atm, treated as superheated vapor.",
}


@dataclass
class FakeResolver(PropertyResolver):
    """호출 기록 + 미리 정한 결과/예외 반환"""

    payload: dict = field(default_factory=lambda: copy.deepcopy(SUPERHEATED_1ATM_100C))
    error: Optional[Exception] = None
    delay_s: float = 0.0
    calls: List[str] = field(default_factory=list)

    async def resolve(self, description: str) -> CalculationResult:
        self.calls.append(description)
        if self.delay_s:
            await asyncio.sleep(self.delay_s)
        if self.error is not None:
            raise self.error
        return CalculationResult.model_validate(self.payload)


@pytest.fixture()
def fake_resolver() -> FakeResolver:
    return FakeResolver()


@pytest.fixture()
def store() -> SessionStore:
    return SessionStore(max_sessions=10)


@pytest.fixture()
def client(store: SessionStore, fake_resolver: FakeResolver):
    """
    TestClient with an isolated session store and the fake resolver.
    """
    app.dependency_overrides[get_session_store] = lambda: store
    app.dependency_overrides[get_resolver] = lambda: fake_resolver
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def steam_payload() -> dict:
    return copy.deepcopy(SUPERHEATED_1ATM_100C)
