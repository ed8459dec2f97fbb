# -*- coding: utf-8 -*-
"""
Helpers for calling the Gemini generateContent REST endpoint.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from plant_diagnosis.services.errors import UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-1.5-flash"


def _get_session() -> requests.Session:
    """Return a requests session for the upstream call."""
    return requests.Session()


def build_generate_url(model: str = DEFAULT_MODEL, api_base: str = DEFAULT_API_BASE) -> str:
    """Build the generateContent URL (inputs: model/api base; output: URL without key)."""
    return f"{api_base.rstrip('/')}/models/{model}:generateContent"


def _error_message(response: requests.Response) -> Optional[str]:
    """Best-effort extraction of error.message from a failed response."""
    try:
        body = response.json()
    except ValueError:
        logger.error("Google API Error: unparseable body (status %s)", response.status_code)
        return None
    logger.error("Google API Error: %s", body)
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if not isinstance(error, dict):
        return None
    return error.get("message") or None


def generate_content(
    api_key: str,
    payload: Dict[str, Any],
    model: str = DEFAULT_MODEL,
    api_base: str = DEFAULT_API_BASE,
    timeout: Optional[float] = None,
) -> Dict[str, Any]:
    """POST a generateContent request (inputs: key/payload; output: parsed JSON body)."""
    with _get_session() as session:
        try:
            response = session.post(
                build_generate_url(model, api_base),
                params={"key": api_key},
                headers={"Content-Type": "application/json"},
                json=payload,
                timeout=timeout,
            )
        except requests.RequestException as exc:
            # Transport errors echo the request URL, which carries the key.
            raise UpstreamError(str(exc).replace(api_key, "***")) from exc
        if not 200 <= response.status_code < 300:
            message = _error_message(response) or "Unknown error"
            raise UpstreamError(f"Google API failed: {message}", status_code=response.status_code)
        return response.json()


def first_candidate_text(result: Dict[str, Any]) -> Optional[str]:
    """Return the first candidate's first text part, or None when there are no candidates."""
    candidates = result.get("candidates") if isinstance(result, dict) else None
    if not candidates:
        return None
    try:
        text = candidates[0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as exc:
        raise UpstreamError("Google API returned a candidate without text.") from exc
    if not isinstance(text, str):
        raise UpstreamError("Google API returned a candidate without text.")
    return text
