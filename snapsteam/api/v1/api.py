from fastapi import APIRouter

from snapsteam.api.v1.endpoints import (
    sessions,
    config,
    units,
    health,
)

api_router = APIRouter()

# ==============================================================================
# 1. Core (입력 폼 + 계산 세션)
# ==============================================================================
api_router.include_router(sessions.router, prefix="/sessions", tags=["Sessions"])

# ==============================================================================
# 2. Reference Data (모드 테이블 / 단위 변환)
# ==============================================================================
api_router.include_router(config.router, prefix="/config", tags=["Config"])
api_router.include_router(units.router, prefix="/units", tags=["Units"])

# ==============================================================================
# 3. System (헬스 체크)
# ==============================================================================
api_router.include_router(health.router, tags=["Health"])
