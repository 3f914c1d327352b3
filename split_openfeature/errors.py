"""
Error types for the Split OpenFeature provider.

Evaluation problems never raise; they are reported through the resolution
envelope. The exceptions here cover provider setup only.
"""

from enum import Enum


class ErrorCategory(str, Enum):
    """Categories of errors for classification."""

    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


class SplitProviderError(Exception):
    """Base exception for all Split provider errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
    ):
        super().__init__(message)
        self.message = message
        self.category = category

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, category={self.category})"


class ArgumentError(SplitProviderError, ValueError):
    """Raised when the provider cannot be built from the supplied configuration."""

    def __init__(self, message: str = "Missing SplitClient instance or SDK key"):
        super().__init__(message, category=ErrorCategory.CONFIGURATION)
