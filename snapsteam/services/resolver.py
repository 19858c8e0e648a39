# snapsteam/services/resolver.py
"""
External Property Resolver (Gemini generateContent).

상태 설명 문자열 -> IAPWS-97 계산 프롬프트 -> JSON 응답 -> CalculationResult.
실패는 세 가지로 구분한다.
  - MissingCredentialError : API Key 없음 (호출 자체 불가)
  - ResolverInvocationError: 네트워크/서비스 오류 (timeout은 ResolverTimeoutError)
  - ResolverResponseError  : 응답이 기대한 구조로 파싱되지 않음
"""
from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from snapsteam.core.config import Settings, get_settings
from snapsteam.core.errors import (
    MissingCredentialError,
    ResolverInvocationError,
    ResolverResponseError,
    ResolverTimeoutError,
)
from snapsteam.schemas.steam import CalculationResult

MISSING_KEY_MESSAGE = (
    "API Key is missing. Please add 'API_KEY' to your Environment Variables.\n"
    "Get your key here: https://aistudio.google.com/app/apikey"
)
NO_DATA_MESSAGE = "No data returned from Gemini."
PARSE_FAILED_MESSAGE = "Failed to process calculation results."

PROMPT_TEMPLATE = """
Act as an expert thermodynamicist and steam table calculator based on IAPWS-97 standards.

Calculate the thermodynamic properties of water/steam for the following user-defined state:
{description}

If the user selected "Saturated", treat the inputs as saturation properties (e.g. Saturation Pressure or Saturation Temperature) combined with Quality.
If the user selected "Subcooled/Superheated", determine the phase (Subcooled, Superheated, or Mixture) based on the two inputs.

If the state is impossible (e.g., negative pressure, temperature below absolute zero, quality < 0 or > 1 in saturated mode), return sensible error-like values or handle gracefully in the description.

IMPORTANT RULES:
1. Standardize all output units to:
   - Pressure: MPa
   - Temperature: °C (Celsius)
   - Specific Volume: m³/kg
   - Internal Energy: kJ/kg
   - Enthalpy: kJ/kg
   - Entropy: kJ/(kg·K)
   - Quality: 0 to 1 (if saturated), -1 (if subcooled liquid), 2 (if superheated vapor).

2. Provide a short description of the phase (e.g., "Compressed Liquid", "Saturated Mixture", "Superheated Vapor", "Supercritical Fluid") and the calculation context.
"""

RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "properties": {
            "type": "OBJECT",
            "properties": {
                "pressure": {"type": "NUMBER", "description": "Pressure in MPa"},
                "temperature": {"type": "NUMBER", "description": "Temperature in Celsius"},
                "specificVolume": {"type": "NUMBER", "description": "Specific Volume in m^3/kg"},
                "internalEnergy": {"type": "NUMBER", "description": "Internal Energy in kJ/kg"},
                "enthalpy": {"type": "NUMBER", "description": "Enthalpy in kJ/kg"},
                "entropy": {"type": "NUMBER", "description": "Entropy in kJ/(kg K)"},
                "quality": {
                    "type": "NUMBER",
                    "description": "Vapor quality (x). Use -1 for Subcooled, 2 for Superheated, 0-1 for Saturated.",
                },
                "phase": {
                    "type": "STRING",
                    "description": "Phase description (e.g. Superheated Vapor)",
                },
            },
            "required": [
                "pressure",
                "temperature",
                "specificVolume",
                "internalEnergy",
                "enthalpy",
                "entropy",
                "phase",
            ],
        },
        "description": {"type": "STRING", "description": "A brief explanation of the state."},
    },
}


def build_prompt(description: str) -> str:
    return PROMPT_TEMPLATE.format(description=description)


def build_request_body(description: str) -> Dict[str, Any]:
    return {
        "contents": [{"role": "user", "parts": [{"text": build_prompt(description)}]}],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": RESPONSE_SCHEMA,
        },
    }


def _extract_text(payload: Any) -> Optional[str]:
    """candidates[0].content.parts[*].text 이어붙이기 (text가 없으면 None)"""
    if not isinstance(payload, dict):
        raise ResolverResponseError(PARSE_FAILED_MESSAGE)
    candidates = payload.get("candidates")
    if candidates is None or candidates == []:
        return None
    if not isinstance(candidates, list) or not isinstance(candidates[0], dict):
        raise ResolverResponseError(PARSE_FAILED_MESSAGE)
    content = candidates[0].get("content")
    if content is None:
        return None
    if not isinstance(content, dict):
        raise ResolverResponseError(PARSE_FAILED_MESSAGE)
    parts = content.get("parts")
    if parts is None:
        return None
    if not isinstance(parts, list):
        raise ResolverResponseError(PARSE_FAILED_MESSAGE)
    texts = [
        p["text"]
        for p in parts
        if isinstance(p, dict) and isinstance(p.get("text"), str) and p["text"]
    ]
    return "".join(texts) if texts else None


def parse_result(text: Optional[str]) -> CalculationResult:
    if not text:
        raise ResolverResponseError(NO_DATA_MESSAGE)
    try:
        return CalculationResult.model_validate(json.loads(text))
    except (ValueError, ValidationError) as e:
        logger.warning(f"Failed to parse Gemini response: {e}")
        raise ResolverResponseError(PARSE_FAILED_MESSAGE, detail=str(e)) from e


# =============================================================================
# Resolver Interface
# =============================================================================
class PropertyResolver(ABC):
    """상태 설명 문자열 -> CalculationResult. 실패 시 RESOLVER_ERRORS 중 하나를 raise."""

    @abstractmethod
    async def resolve(self, description: str) -> CalculationResult:
        pass


class GeminiPropertyResolver(PropertyResolver):
    def __init__(
        self,
        api_key: Optional[str],
        *,
        model: str = "gemini-3-pro-preview",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout_s: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = (api_key or "").strip() or None
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "GeminiPropertyResolver":
        s = settings or get_settings()
        key = s.API_KEY.get_secret_value() if s.API_KEY is not None else None
        return cls(
            key,
            model=s.GEMINI_MODEL,
            base_url=s.GEMINI_API_BASE,
            timeout_s=s.RESOLVER_TIMEOUT_S,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def resolve(self, description: str) -> CalculationResult:
        if not self.api_key:
            raise MissingCredentialError(MISSING_KEY_MESSAGE)

        logger.info(f"Gemini request: model={self.model} | {description}")

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_s, transport=self._transport
            ) as client:
                response = await client.post(
                    self.endpoint,
                    json=build_request_body(description),
                    headers={"x-goog-api-key": self.api_key},
                )
                response.raise_for_status()
        except httpx.TimeoutException as e:
            raise ResolverTimeoutError(
                f"Gemini did not respond within {self.timeout_s:g} seconds."
            ) from e
        except httpx.HTTPStatusError as e:
            raise ResolverInvocationError(
                f"Gemini request failed with HTTP {e.response.status_code}.",
                detail=e.response.text[:500],
            ) from e
        except httpx.InvalidURL as e:
            raise ResolverInvocationError(f"Invalid Gemini endpoint: {e}") from e
        except httpx.HTTPError as e:
            raise ResolverInvocationError(f"Gemini request failed: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise ResolverResponseError(PARSE_FAILED_MESSAGE) from e

        result = parse_result(_extract_text(payload))
        logger.info(f"Gemini response: phase={result.properties.phase}")
        return result
