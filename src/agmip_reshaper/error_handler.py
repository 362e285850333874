"""Error handling implementation for the document reshaper."""

import json
import logging
from typing import Optional
from .types import (
    ErrorType,
    ReshapeError,
    ReshapeWarning,
    ValidationError,
    ValidationResult,
    WarningType
)


# Losing data is an error, overwriting or ignoring a duplicate is a warning.
_ERROR_LEVEL_TYPES = {
    WarningType.DROPPED_FIELD,
    WarningType.LIST_TYPE_MISMATCH,
}


class ErrorHandler:
    """
    Central reporting point for non-fatal reshaping problems.

    Every dropped or overwritten value passes through ``report`` so that it
    is logged and returned to the caller as a ReshapeWarning. In strict mode
    the first problem is raised as a ReshapeError instead.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, strict: bool = False):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance for error reporting
            strict: Raise ReshapeError instead of returning warnings
        """
        self.logger = logger or logging.getLogger(__name__)
        self.strict = strict

    def report(self, warning_type: WarningType, message: str,
               location: Optional[str] = None) -> ReshapeWarning:
        """
        Log a reshaping problem and build the warning describing it.

        Args:
            warning_type: Kind of problem
            message: Human readable description
            location: Dotted path of the offending value

        Returns:
            ReshapeWarning for the caller's warning list

        Raises:
            ReshapeError: If the handler is strict
        """
        text = f"{message} [{location}]" if location else message

        if warning_type in _ERROR_LEVEL_TYPES:
            self.logger.error(text)
        else:
            self.logger.warning(text)

        if self.strict:
            raise ReshapeError(text, warning_type, location)

        return ReshapeWarning(type=warning_type, message=message, location=location)

    def validate_input(self, input_data: str) -> ValidationResult:
        """
        Validate a JSON document string.

        Args:
            input_data: JSON string to validate

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if not input_data.strip():
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message="JSON string is empty",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        try:
            data = json.loads(input_data)
        except json.JSONDecodeError as e:
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message=f"Invalid JSON syntax: {e.msg}",
                location=f"line {e.lineno}, column {e.colno}"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        if not isinstance(data, dict):
            errors.append(ValidationError(
                type=ErrorType.STRUCTURE,
                message=f"Document root must be an object, got {type(data).__name__}",
                location="root"
            ))
        elif not data:
            warnings.append("Document is empty")

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )
