# -*- coding: utf-8 -*-
"""
Typed errors for the diagnosis workflow.
"""


class DiagnosisError(Exception):
    """Base class for diagnosis-related errors."""


class ClientInputError(DiagnosisError):
    """Raised when the request body is missing image data or its mimeType."""


class ServerConfigError(DiagnosisError):
    """Raised when the upstream API credential is not configured."""


class UpstreamError(DiagnosisError):
    """Raised when the Gemini API fails or returns an unusable result."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code
