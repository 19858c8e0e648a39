# snapsteam/core/logger.py
import sys
from loguru import logger
from snapsteam.core.config import settings

# 로그 저장 경로: settings.LOG_DIR (기본값: 실행 위치 기준 .logs/)
LOG_DIR = settings.log_dir_path
LOG_FILE = LOG_DIR / "snapsteam_server.log"
SESSION_LOG_FILE = LOG_DIR / "snapsteam_sessions.log"

# 세션/계산 이력 전용 채널: session_logger.info(...) 로 기록하면 sessions 로그에도 남는다
SESSION_CHANNEL = "sessions"
session_logger = logger.bind(channel=SESSION_CHANNEL)


def _is_session_record(record) -> bool:
    return record["extra"].get("channel") == SESSION_CHANNEL


def setup_logging() -> str:
    """
    Loguru 로그 설정 초기화.
    - Console: INFO 이상
    - File (snapsteam_server.log): DEBUG 이상, 전체 통합 로그
    - File (snapsteam_sessions.log): 세션 생성/삭제 및 계산 요청/결과만 (Gemini 응답 감사용)
    """
    LOG_DIR.mkdir(parents=True, exist_ok=True)

    logger.remove()

    logger.add(
        sys.stderr,
        level="INFO",
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
    )

    logger.add(
        str(LOG_FILE),
        rotation="00:00",
        retention="10 days",
        compression="zip",
        level="DEBUG",
        enqueue=True,
        encoding="utf-8",
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{line} - {message}"
    )

    # 계산 이력은 용량 기준으로 회전, 30일 보관
    logger.add(
        str(SESSION_LOG_FILE),
        rotation="10 MB",
        retention="30 days",
        level="INFO",
        enqueue=True,
        encoding="utf-8",
        filter=_is_session_record,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {message}"
    )

    return str(LOG_FILE)
