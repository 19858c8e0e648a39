# snapsteam/core/config.py
from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Literal, List, Optional, Union

from pydantic import Field, AnyHttpUrl, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 환경 설정."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )

    # =========================================================
    # 1. 프로젝트 기본 정보
    # =========================================================
    PROJECT_NAME: str = Field(
        default="SnapSteam API", description="Swagger UI 등에 표시될 프로젝트 이름"
    )
    API_V1_STR: str = Field(default="/api/v1", description="API 버전 Prefix")

    APP_ENV: Literal["local", "dev", "test", "prod"] = Field(
        default="local",
        description="애플리케이션 실행 환경 (local/dev/test/prod)",
    )

    # =========================================================
    # 2. 보안 / CORS
    # =========================================================
    BACKEND_CORS_ORIGINS: Annotated[List[AnyHttpUrl], NoDecode] = Field(
        default=[], description="CORS 허용 도메인 목록 (예: http://localhost:3000)"
    )

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        """문자열로 들어온 CORS 설정을 리스트로 변환"""
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, str):
            return json.loads(v)
        elif isinstance(v, list):
            return v
        raise ValueError(v)

    # =========================================================
    # 3. External Property Resolver (Gemini)
    # =========================================================
    API_KEY: Optional[SecretStr] = Field(
        default=None,
        description="Gemini API Key (https://aistudio.google.com/app/apikey)",
    )

    GEMINI_MODEL: str = Field(
        default="gemini-3-pro-preview",
        description="generateContent 호출에 사용할 모델 이름",
    )

    GEMINI_API_BASE: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Gemini REST API Base URL",
    )

    RESOLVER_TIMEOUT_S: float = Field(
        default=60.0,
        gt=0,
        description="물성 계산 요청 1건의 최대 대기 시간(초). 초과 시 RESOLVER_TIMEOUT",
    )

    # =========================================================
    # 4. 세션 / 로그
    # =========================================================
    MAX_SESSIONS: int = Field(
        default=1000,
        ge=1,
        description="메모리에 유지할 최대 세션 수 (초과 시 가장 오래된 세션부터 제거)",
    )

    LOG_DIR: str = Field(
        default=".logs",
        description="로그 파일 디렉터리 (상대/절대 경로 모두 허용)",
    )

    # =========================================================
    # 5. Helper Properties
    # =========================================================

    @property
    def has_api_key(self) -> bool:
        return self.API_KEY is not None and bool(self.API_KEY.get_secret_value().strip())

    @property
    def log_dir_path(self) -> Path:
        """로그 디렉터리 절대 경로 (Path 객체)."""
        return Path(self.LOG_DIR).resolve()


@lru_cache
def get_settings() -> Settings:
    """FastAPI Depends용 싱글톤 Settings 인스턴스."""
    return Settings()


# 전역 설정 객체
settings = get_settings()
