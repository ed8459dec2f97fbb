# -*- coding: utf-8 -*-
"""
Diagnosis service that wraps the Gemini call without Flask dependencies.
"""
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from plant_diagnosis.services import gemini
from plant_diagnosis.services.errors import ClientInputError, ServerConfigError
from plant_diagnosis.services.prompt import build_payload

FALLBACK_MESSAGE = "Could not analyze the image. Please try another one."
HTML_FENCE_OPEN = "```html"
FENCE_CLOSE = "```"


@dataclass(frozen=True)
class DiagnosisConfig:
    model: str = gemini.DEFAULT_MODEL  # Gemini model name in the generateContent path
    api_base: str = gemini.DEFAULT_API_BASE  # REST base URL including API version
    timeout: Optional[float] = None  # seconds; None leaves the transport default


@dataclass(frozen=True)
class DiagnosisRequest:
    image: str  # base64-encoded image bytes
    mime_type: str  # media type of the image, e.g. image/jpeg

    @classmethod
    def from_payload(cls, payload: Any) -> "DiagnosisRequest":
        """Build from a decoded JSON body; raises ClientInputError on missing fields."""
        if not isinstance(payload, Mapping):
            payload = {}
        image = payload.get("image")
        mime_type = payload.get("mimeType")
        if not image or not mime_type:
            raise ClientInputError("Image data and mimeType are required.")
        return cls(image=image, mime_type=mime_type)


DEFAULT_DIAGNOSIS_CONFIG = DiagnosisConfig()


def strip_html_fence(text: str) -> str:
    """
    Remove a ```html ... ``` markdown fence the model sometimes wraps its answer in.
    Text that does not open with the fence is returned unchanged.
    """
    if not text.startswith(HTML_FENCE_OPEN):
        return text
    body = text[len(HTML_FENCE_OPEN):]
    stripped = body.rstrip()
    if stripped.endswith(FENCE_CLOSE):
        body = stripped[: -len(FENCE_CLOSE)]
    return body.strip()


def run_diagnosis(
    request: DiagnosisRequest,
    api_key: Optional[str],
    config: DiagnosisConfig = DEFAULT_DIAGNOSIS_CONFIG,
) -> str:
    """Diagnose one plant image (inputs: request/api key; output: HTML string)."""
    if not api_key:
        raise ServerConfigError("API key is not configured on the server.")

    result = gemini.generate_content(
        api_key,
        build_payload(request.image, request.mime_type),
        model=config.model,
        api_base=config.api_base,
        timeout=config.timeout,
    )
    text = gemini.first_candidate_text(result)
    if text is None:
        text = FALLBACK_MESSAGE
    return strip_html_fence(text)
