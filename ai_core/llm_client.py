"""LLM client for the Gemini generation API.

One call per request: no retries, no streaming. Errors from the SDK propagate
to the caller so the route can turn them into a 500.
"""
from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Any, Optional

import google.generativeai as genai


logger = logging.getLogger("ai_core.llm_client")

DEFAULT_MODEL = "gemini-2.5-pro"


class LLMClientError(RuntimeError):
    """Raised when the model cannot be called (e.g. missing API key)."""


@lru_cache(maxsize=4)
def _get_model(api_key: str, model_name: str) -> Any:
    genai.configure(api_key=api_key)
    return genai.GenerativeModel(model_name)


def _response_text(response: Any) -> str:
    """Text of the first candidate, or "" when the model returned nothing."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return ""
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    return "".join(getattr(p, "text", "") or "" for p in parts).strip()


def generate(
    prompt: str,
    temperature: float = 0.7,
    api_key: Optional[str] = None,
    model_name: Optional[str] = None,
) -> str:
    """Send a single user-role prompt and return the trimmed reply.

    Args:
        prompt: Full instruction string.
        temperature: Sampling temperature passed as generation config.
        api_key: Overrides GEMINI_API_KEY.
        model_name: Overrides GEMINI_MODEL.
    Returns:
        Model output text, "" if the response carried no text.
    """
    key = api_key or os.getenv("GEMINI_API_KEY", "")
    if not key:
        raise LLMClientError("GEMINI_API_KEY not set. Configure it in environment or .env")
    name = model_name or os.getenv("GEMINI_MODEL", DEFAULT_MODEL)

    model = _get_model(key, name)
    logger.debug("Calling %s: prompt_len=%s temperature=%s", name, len(prompt), temperature)
    response = model.generate_content(
        [{"role": "user", "parts": [{"text": prompt}]}],
        generation_config={"temperature": temperature},
    )
    text = _response_text(response)
    logger.debug("Model replied with %s chars", len(text))
    return text
