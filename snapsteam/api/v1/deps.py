# snapsteam/api/v1/deps.py
from __future__ import annotations

from functools import lru_cache

from snapsteam.core.config import settings
from snapsteam.services.resolver import GeminiPropertyResolver, PropertyResolver
from snapsteam.services.session import SessionStore


@lru_cache
def get_session_store() -> SessionStore:
    """프로세스 단위 싱글톤 세션 저장소 (메모리, 비영속)"""
    return SessionStore(max_sessions=settings.MAX_SESSIONS)


def get_resolver() -> PropertyResolver:
    """FastAPI Depends용. 테스트에서는 dependency_overrides로 교체한다."""
    return GeminiPropertyResolver.from_settings(settings)
