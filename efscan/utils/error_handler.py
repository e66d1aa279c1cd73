"""
Error taxonomy and centralized error handling for the card scanner.

Crop-level and single-recognition failures are recoverable and degrade to an
absent field; backend initialization failures are not and propagate to the
caller of the extraction entry points.
"""

from typing import Any, Dict, Optional
from dataclasses import dataclass


class CardScanError(Exception):
    """Base exception class for all card scanner errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(CardScanError):
    """Raised when settings, layout data or alias tables are invalid."""
    pass


class ImageDecodeError(CardScanError):
    """Raised when input bytes cannot be decoded to a pixel buffer."""
    pass


class InvalidRegionError(CardScanError):
    """Raised when a region lies outside the source image or crops to nothing."""
    pass


class RecognitionError(CardScanError):
    """Raised when a single recognition call fails."""
    pass


class RecognitionUnavailableError(RecognitionError):
    """Raised when the recognition backend cannot be initialized."""
    pass


class RecognitionTimeoutError(RecognitionError):
    """Raised when a recognition call exceeds its timeout."""
    pass


@dataclass
class ErrorContext:
    """Context information for error reporting."""
    operation: str
    module: str
    function: str
    input_data: Optional[Dict[str, Any]] = None


def handle_error(
    error: Exception,
    context: ErrorContext,
    logger,
    reraise: bool = True,
    default_return: Any = None
) -> Any:
    """
    Log an error with its context and optionally recover.

    Args:
        error: The exception that occurred
        context: Context information about where the error occurred
        logger: structlog logger used for reporting
        reraise: Whether to re-raise the exception after logging
        default_return: Value to return if not re-raising

    Returns:
        The default_return value if not re-raising

    Raises:
        The original exception if reraise is True
    """
    error_msg = f"Error in {context.module}.{context.function} during {context.operation}"
    if isinstance(error, CardScanError):
        error_msg += f": {error.message}"
    else:
        error_msg += f": {error}"

    log = logger.error if reraise else logger.warning
    log(
        error_msg,
        error_type=type(error).__name__,
        operation=context.operation,
        error_module=context.module,
        error_function=context.function,
        input_data=context.input_data,
        details=getattr(error, "details", None) or None,
    )

    if reraise:
        raise error

    return default_return


def validate_required_fields(data: Dict[str, Any], required_fields: list, context: ErrorContext) -> None:
    """
    Validate that required fields are present in data.

    Raises:
        ConfigurationError: If required fields are missing
    """
    missing_fields = [field for field in required_fields if field not in data or data[field] is None]

    if missing_fields:
        raise ConfigurationError(
            f"Missing required fields: {missing_fields}",
            details={
                "missing_fields": missing_fields,
                "available_fields": list(data.keys()),
                "operation": context.operation,
            }
        )
