from __future__ import annotations

import json
import logging
import re
import time
from functools import lru_cache
from typing import Any

from openai import OpenAI

from app.core.config import get_env, get_env_bool, get_env_int

logger = logging.getLogger(__name__)

_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")
_PLACEHOLDER_PREFIXES = ("your_", "replace_", "sk-xxx")


class UpstreamInsightError(RuntimeError):
    def __init__(self, message: str, *, code: str = "llm_unavailable"):
        super().__init__(message)
        self.code = code


def _api_key() -> str:
    return (get_env("OPENAI_API_KEY") or "").strip()


def _is_placeholder_key(value: str) -> bool:
    lower = value.lower()
    return lower.startswith(_PLACEHOLDER_PREFIXES) or lower in {"changeme", "todo"}


def insights_llm_enabled() -> bool:
    """LLM insights need the switch on and a real-looking OpenAI key."""
    if not get_env_bool("INSIGHTS_LLM_ENABLED", True):
        return False
    key = _api_key()
    return bool(key) and not _is_placeholder_key(key)


def _timeout_s() -> float:
    try:
        return float(get_env("INSIGHTS_LLM_TIMEOUT_S", "30") or "30")
    except ValueError:
        return 30.0


@lru_cache(maxsize=1)
def _client() -> OpenAI:
    return OpenAI(
        api_key=_api_key(),
        base_url=get_env("OPENAI_BASE_URL"),
        timeout=_timeout_s(),
        max_retries=get_env_int("OPENAI_MAX_RETRIES", 2),
    )


def model_name() -> str:
    return (get_env("AI_MODEL") or get_env("OPENAI_MODEL") or "gpt-4o-mini").strip()


def max_output_tokens() -> int:
    return get_env_int("INSIGHTS_MAX_TOKENS", 1500)


def extract_json_from_text(text: str) -> dict[str, Any]:
    """Parse the outermost JSON object in a model reply, ignoring code fences or prose."""
    match = _JSON_OBJECT_RE.search(text or "")
    if not match:
        raise UpstreamInsightError("No JSON object found in model response.", code="invalid_json")
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        raise UpstreamInsightError(f"Model response is not valid JSON: {exc}", code="invalid_json") from exc
    if not isinstance(parsed, dict):
        raise UpstreamInsightError("Model response JSON is not an object.", code="invalid_schema")
    return parsed


def json_completion(
    *,
    prompt: str,
    system_prompt: str | None = None,
    temperature: float = 0.3,
    max_tokens: int | None = None,
) -> dict[str, Any]:
    if not insights_llm_enabled():
        raise UpstreamInsightError("Insights LLM is disabled or OpenAI is not configured.", code="llm_disabled")

    messages: list[dict[str, str]] = []
    if system_prompt:
        messages.append({"role": "system", "content": system_prompt})
    messages.append({"role": "user", "content": prompt})

    started = time.perf_counter()
    try:
        response = _client().chat.completions.create(
            model=model_name(),
            messages=messages,
            temperature=temperature,
            response_format={"type": "json_object"},
            max_tokens=max_tokens or max_output_tokens(),
        )
    except Exception as exc:  # noqa: BLE001 - surfaced as an upstream failure
        logger.warning("insights_llm_failed model=%s prompt_len=%s: %s", model_name(), len(prompt), exc)
        raise UpstreamInsightError(f"OpenAI request failed: {exc}", code="llm_exception") from exc

    latency_ms = int((time.perf_counter() - started) * 1000)
    content = response.choices[0].message.content if response.choices else ""
    if not content:
        logger.warning("insights_llm_empty model=%s latency_ms=%s", model_name(), latency_ms)
        raise UpstreamInsightError("OpenAI returned an empty response.", code="empty_response")

    parsed = extract_json_from_text(content)
    logger.info("insights_llm_ok model=%s latency_ms=%s", model_name(), latency_ms)
    return parsed
