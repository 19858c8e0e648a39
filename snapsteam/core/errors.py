# snapsteam/core/errors.py
from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

__all__ = [
    "SnapSteamError",
    "MissingCredentialError",
    "ResolverInvocationError",
    "ResolverResponseError",
    "ResolverTimeoutError",
    "InvalidTransitionError",
    "CalculationNotReadyError",
    "CalculationInProgressError",
    "SessionNotFoundError",
    "RESOLVER_ERRORS",
    "register_exception_handlers",
]


# =============================================================================
# Domain Exceptions
# =============================================================================
class SnapSteamError(Exception):
    """애플리케이션 공통 예외. code/status_code는 problem 응답에 그대로 사용된다."""

    code: str = "SNAPSTEAM_ERROR"
    status_code: int = 500

    def __init__(self, message: str, *, detail: Any | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class MissingCredentialError(SnapSteamError):
    code = "MISSING_CREDENTIAL"
    status_code = 503


class ResolverInvocationError(SnapSteamError):
    code = "RESOLVER_FAILED"
    status_code = 502


class ResolverResponseError(SnapSteamError):
    code = "INVALID_RESOLVER_RESPONSE"
    status_code = 502


class ResolverTimeoutError(SnapSteamError):
    code = "RESOLVER_TIMEOUT"
    status_code = 504


class InvalidTransitionError(SnapSteamError, ValueError):
    code = "INVALID_TRANSITION"
    status_code = 422


class CalculationNotReadyError(SnapSteamError):
    code = "CALCULATION_NOT_READY"
    status_code = 400


class CalculationInProgressError(SnapSteamError):
    code = "CALCULATION_IN_PROGRESS"
    status_code = 409


class SessionNotFoundError(SnapSteamError):
    code = "SESSION_NOT_FOUND"
    status_code = 404


# 외부 물성 계산기 호출 단계에서 발생할 수 있는 예외 (세션 error로 기록 대상)
RESOLVER_ERRORS = (
    MissingCredentialError,
    ResolverInvocationError,
    ResolverResponseError,
    ResolverTimeoutError,
)


# =============================================================================
# Problem Response
# =============================================================================
def _build_problem_response(
    *,
    status_code: int,
    code: str,
    message: str,
    detail: Any | None = None,
) -> JSONResponse:
    """애플리케이션 공통 에러 응답 포맷 생성."""
    payload: dict[str, Any] = {
        "code": code,
        "message": message,
    }
    if detail is not None:
        payload["detail"] = detail

    return JSONResponse(
        status_code=status_code,
        content=payload,
        media_type="application/problem+json",
    )


def _convert_validation_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """FastAPI RequestValidationError → 단순화된 에러 리스트로 변환."""
    return [
        {
            "loc": list(e.get("loc") or []),
            "msg": e.get("msg"),
            "type": e.get("type"),
        }
        for e in exc.errors()
    ]


def register_exception_handlers(app: FastAPI) -> None:
    """
    FastAPI 앱 전역 예외 핸들러 등록.

    - SnapSteamError: 도메인 예외 (code/status_code 그대로 사용)
    - RequestValidationError: 입력 검증 실패(422)
    - StarletteHTTPException: 일반 HTTP 에러(404 등)
    - Exception: 그 외 모든 예외(500)
    """

    @app.exception_handler(SnapSteamError)
    async def snapsteam_exception_handler(
        request: Request,
        exc: SnapSteamError,
    ) -> JSONResponse:
        logger.warning(
            "{} {} -> {} {} ({})",
            request.method,
            request.url.path,
            exc.status_code,
            exc.code,
            exc.message,
        )
        return _build_problem_response(
            status_code=exc.status_code,
            code=exc.code,
            message=exc.message,
            detail=exc.detail,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """요청 바디/쿼리/패스 파라미터 검증 실패 핸들러."""
        errors = _convert_validation_errors(exc)

        logger.info(
            "Request validation failed: {} {} ({} errors)",
            request.method,
            request.url.path,
            len(errors),
        )

        return _build_problem_response(
            status_code=422,
            code="INVALID_INPUT",
            message="입력 검증 실패",
            detail=errors,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        logger.warning(
            "HTTPException: {} {} -> {} ({})",
            request.method,
            request.url.path,
            exc.status_code,
            exc.detail,
        )
        return _build_problem_response(
            status_code=exc.status_code,
            code="HTTP_ERROR",
            message=str(exc.detail) if exc.detail else "HTTP error",
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """최상위 핸들러: 예상치 못한 모든 예외를 500으로 포장."""
        logger.opt(exception=exc).error(
            "Unhandled exception: {} {}",
            request.method,
            request.url.path,
        )
        return _build_problem_response(
            status_code=500,
            code="INTERNAL_SERVER_ERROR",
            message="알 수 없는 오류가 발생했습니다.",
        )
