"""
Exception types shared across the NicheGen backend.
"""


class NicheGenError(Exception):
    """Base class for all application errors."""


class GenerationError(NicheGenError):
    """Raised when the content pipeline cannot produce an answer."""


class RequestValidationError(NicheGenError):
    """Raised when a request body fails schema validation."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
