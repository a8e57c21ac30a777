"""
Exception classes for recipe parsing and generation
"""

from typing import Optional


class RecipeGenError(Exception):
    """Base exception for recipegen"""
    pass


class InvalidInput(RecipeGenError):
    """Raised when the raw recipe text is missing, empty or not a string"""
    def __init__(self, value: object):
        self.value_type = type(value).__name__
        if isinstance(value, str):
            message = "Raw recipe text is empty"
        else:
            message = f"Raw recipe text must be a string, got {self.value_type}"
        super().__init__(message)


class GenerationError(RecipeGenError):
    """Raised when the recipe generation service call fails"""
    retryable = False

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class TransientGenerationError(GenerationError):
    """Network failure, timeout or an overloaded service; safe to retry"""
    retryable = True


class RateLimitError(TransientGenerationError):
    """The service rejected the call with HTTP 429"""
    pass


class PermanentGenerationError(GenerationError):
    """Authentication or request validation failure; retrying will not help"""
    pass
