"""JSON text parsing with validation."""

import json
import logging
from typing import Any, Optional
from .error_handler import ErrorHandler


class JSONParser:
    """
    JSON parser that validates text before handing values to the engine.

    Unlike the engine itself, the parser raises: it sits at the boundary
    where invalid input should be reported to whoever supplied the text.
    """

    def __init__(self, error_handler: Optional[ErrorHandler] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the JSON parser.

        Args:
            error_handler: Optional ErrorHandler instance
            logger: Optional logger instance
        """
        self.error_handler = error_handler or ErrorHandler()
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, json_string: str) -> Any:
        """
        Parse a JSON string.

        Args:
            json_string: JSON string to parse

        Returns:
            Parsed JSON value

        Raises:
            ValueError: If JSON is invalid
        """
        validation_result = self.error_handler.validate_input(json_string)
        if not validation_result.is_valid:
            error_messages = [
                f"{error.message} ({error.location})" if error.location else error.message
                for error in validation_result.errors
            ]
            raise ValueError(f"Invalid JSON input: {'; '.join(error_messages)}")

        for warning in validation_result.warnings:
            self.logger.warning(warning)

        data = json.loads(json_string)
        self.logger.debug(f"Parsed JSON root of type {type(data).__name__}")
        return data
