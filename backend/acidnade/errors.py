"""Error types"""
from typing import Optional


class RelayError(Exception):
    """Base error for the relay"""


class ConfigurationError(RelayError):
    """Required configuration is missing or invalid"""


class GenerationError(RelayError):
    """Generation call failed after all attempts"""

    def __init__(self, message: str, kind: str = "upstream", attempts: int = 1,
                 cause: Optional[BaseException] = None):
        super().__init__(message)
        self.kind = kind
        self.attempts = attempts
        self.cause = cause
