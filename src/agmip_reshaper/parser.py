"""JSON document parsing for the command-line interface."""

import json
import logging
from typing import Any, Dict, Optional
from .error_handler import ErrorHandler


class DocumentParser:
    """
    Parses JSON text into a document and serializes documents back.

    Documents are produced by the AgMIP translators; the parser only checks
    that the text is JSON with an object at the root.
    """

    def __init__(self, error_handler: Optional[ErrorHandler] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the document parser.

        Args:
            error_handler: Optional ErrorHandler instance
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.error_handler = error_handler or ErrorHandler(self.logger)

    def parse(self, json_string: str) -> Dict[str, Any]:
        """
        Parse a JSON document string.

        Args:
            json_string: JSON string to parse

        Returns:
            The parsed document

        Raises:
            ValueError: If the text is not JSON or its root is not an object
        """
        validation_result = self.error_handler.validate_input(json_string)
        if not validation_result.is_valid:
            error_messages = [error.message for error in validation_result.errors]
            raise ValueError(f"Invalid document: {'; '.join(error_messages)}")

        for warning in validation_result.warnings:
            self.logger.warning(warning)

        document = json.loads(json_string)
        self.logger.info(f"Parsed document with {len(document)} top-level keys")
        return document

    @staticmethod
    def dumps(document: Any, indent: Optional[int] = 2) -> str:
        return json.dumps(document, indent=indent, ensure_ascii=False)
