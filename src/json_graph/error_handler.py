"""Error handling implementation for the JSON graph engine."""

import logging
from typing import Optional
from .types import (
    ErrorHandlerInterface,
    ValidationResult,
    ValidationError,
    ErrorResponse,
    GraphProcessingError,
    ErrorType,
    Diagnostic,
)
from .utils.validation import ValidationUtils


class ErrorHandler(ErrorHandlerInterface):
    """
    Error handler for graph engine operations.

    Turns internal failures into diagnostics and log lines so that build,
    layout and reconstruct can degrade instead of raising to the caller.
    Holds no per-call state.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, max_depth: int = 50):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance for error reporting
            max_depth: Depth guard used when warning about deep input
        """
        self.logger = logger or logging.getLogger(__name__)
        self.max_depth = max_depth

    def validate_input(self, input_data: str) -> ValidationResult:
        """
        Validate input JSON string.

        Args:
            input_data: JSON string to validate

        Returns:
            ValidationResult with validation details
        """
        try:
            return ValidationUtils.validate_json_string(input_data, self.max_depth)
        except Exception as e:
            self.logger.error(f"Unexpected error during input validation: {e}")
            return ValidationResult(
                is_valid=False,
                errors=[ValidationError(
                    type=ErrorType.SYNTAX,
                    message=f"Validation failed with unexpected error: {str(e)}",
                    location="input"
                )],
                warnings=[]
            )

    def handle_processing_error(self, error: GraphProcessingError) -> ErrorResponse:
        """
        Handle a processing error and describe how it was degraded.

        Args:
            error: GraphProcessingError to handle

        Returns:
            ErrorResponse carrying the diagnostic for the caller
        """
        if error.error_type == ErrorType.STRUCTURAL_GUARD:
            return self._handle_guard_error(error)
        elif error.error_type == ErrorType.FORMATTING:
            return self._handle_formatting_error(error)
        elif error.error_type == ErrorType.TRAVERSAL:
            return self._handle_traversal_error(error)
        elif error.error_type == ErrorType.RECONSTRUCTION:
            return self._handle_reconstruction_error(error)
        else:
            self.logger.error(f"Processing error: {error.error_type.value} - {error}")
            return ErrorResponse(
                can_recover=False,
                suggested_action="Unknown error type. Please check logs and retry.",
                diagnostic=self._diagnostic(error)
            )

    def _handle_guard_error(self, error: GraphProcessingError) -> ErrorResponse:
        """Handle max-depth truncation."""
        self.logger.warning(f"Depth guard triggered: {error}")
        return ErrorResponse(
            can_recover=True,
            suggested_action="Raise max_depth or flatten the document; "
                           "the truncated subtree was replaced by a placeholder node.",
            diagnostic=self._diagnostic(error)
        )

    def _handle_formatting_error(self, error: GraphProcessingError) -> ErrorResponse:
        """Handle a value that could not be rendered."""
        self.logger.warning(f"Formatting failure: {error}")
        return ErrorResponse(
            can_recover=True,
            suggested_action="Check the value type; only JSON values render faithfully.",
            diagnostic=self._diagnostic(error)
        )

    def _handle_traversal_error(self, error: GraphProcessingError) -> ErrorResponse:
        """Handle an unexpected failure inside one subtree."""
        self.logger.error(f"Traversal failure: {error}")
        return ErrorResponse(
            can_recover=True,
            suggested_action="The failing subtree was replaced by an error node; "
                           "sibling fields were still processed.",
            diagnostic=self._diagnostic(error)
        )

    def _handle_reconstruction_error(self, error: GraphProcessingError) -> ErrorResponse:
        """Handle an unresolvable node or edge while rebuilding JSON."""
        self.logger.warning(f"Reconstruction gap: {error}")
        return ErrorResponse(
            can_recover=True,
            suggested_action="Reconnect or remove the affected nodes in the graph.",
            diagnostic=self._diagnostic(error)
        )

    def _diagnostic(self, error: GraphProcessingError) -> Diagnostic:
        return Diagnostic(
            error_type=error.error_type,
            message=str(error),
            path=error.context.get("path")
        )
