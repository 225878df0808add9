# -*- coding: utf-8 -*-
"""Location: ./fragjson/utils/error_formatter.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: fragjson contributors

Centralized error formatting for decode failures and settings validation.
This module transforms fragment decoding errors and Pydantic validation
errors into consistent, user-friendly structures suitable for printing.

The ErrorFormatter class handles:
- FragmentDecodeError formatting with its diagnostic context
- Pydantic ValidationError formatting for settings
- Mapping technical validation messages to user-friendly explanations

Examples:
    >>> from fragjson.utils.error_formatter import ErrorFormatter
    >>> from fragjson.exceptions import AbsentSlotError
    >>> result = ErrorFormatter.format_decode_error(AbsentSlotError("Slot 3 is empty", index=3))
    >>> result['kind'], result['success']
    ('AbsentSlot', False)
"""

# Standard
import logging
from typing import Any, Dict

# Third-Party
from pydantic import ValidationError

# First-Party
from fragjson.exceptions import FragmentDecodeError

logger = logging.getLogger(__name__)


class ErrorFormatter:
    """Transform technical errors into user-friendly messages.

    Examples:
        >>> formatter = ErrorFormatter()
        >>> isinstance(formatter, ErrorFormatter)
        True
    """

    @staticmethod
    def format_decode_error(error: FragmentDecodeError) -> Dict[str, Any]:
        """Convert a decode error to a structured, printable form.

        Args:
            error (FragmentDecodeError): The decoding failure to format

        Returns:
            Dict[str, Any]: A dictionary containing:
                - message: Error description including its context
                - kind: Error kind name
                - details: One ``{"field", "value"}`` entry per context attribute
                - success: Always False for errors

        Examples:
            >>> from fragjson.exceptions import MalformedPointerLineError
            >>> err = MalformedPointerLineError("Pointer line must have the form P<index>:<json>", line_number=4, line="X")
            >>> result = ErrorFormatter.format_decode_error(err)
            >>> result['message']
            "Pointer line must have the form P<index>:<json> (line_number=4, line='X')"
            >>> result['details']
            [{'field': 'line_number', 'value': 4}, {'field': 'line', 'value': 'X'}]
        """
        logger.debug(f"Decode error: {error!r}")
        details = [{"field": name, "value": value} for name, value in error.context().items()]
        return {"message": str(error), "kind": error.kind, "details": details, "success": False}

    @staticmethod
    def format_validation_error(error: ValidationError) -> Dict[str, Any]:
        """Convert Pydantic errors to user-friendly format.

        Args:
            error (ValidationError): The Pydantic validation error to format

        Returns:
            Dict[str, Any]: A dictionary with formatted error details containing:
                - message: General error description
                - details: List of field-specific errors
                - success: Always False for errors

        Examples:
            >>> from fragjson.config import Settings
            >>> try:
            ...     Settings(max_depth=0)
            ... except ValidationError as e:
            ...     result = ErrorFormatter.format_validation_error(e)
            >>> result['message']
            'Validation failed: Max_Depth is too small'
            >>> result['details'][0]['field']
            'max_depth'
            >>> result['success']
            False
        """
        errors = []
        user_message = "Invalid settings"

        for err in error.errors():
            loc = err.get("loc", ["field"])
            field = str(loc[-1]) if loc else "field"
            msg = err.get("msg", "Invalid value")

            # Map technical messages to user-friendly ones
            user_message = ErrorFormatter._get_user_message(field, msg)
            errors.append({"field": field, "message": user_message})

        # Log the full error for debugging
        logger.debug(f"Validation error: {error}")

        return {"message": f"Validation failed: {user_message}", "details": errors, "success": False}

    @staticmethod
    def _get_user_message(field: str, technical_msg: str) -> str:
        """Map technical validation messages to user-friendly ones.

        Args:
            field (str): The field name that failed validation
            technical_msg (str): The technical validation message from Pydantic

        Returns:
            str: User-friendly error message with field context

        Examples:
            >>> ErrorFormatter._get_user_message("max_depth", "Input should be less than or equal to 300")
            'Max_Depth is too large'
            >>> ErrorFormatter._get_user_message("log_level", "Input should be 'DEBUG', 'INFO', 'WARNING', 'ERROR' or 'CRITICAL'")
            'Log_Level must be one of the allowed values'
            >>> ErrorFormatter._get_user_message("output_indent", "Input should be a valid integer")
            'Output_Indent must be a whole number'
            >>> ErrorFormatter._get_user_message("custom_field", "Some unknown error")
            'Invalid custom_field'
        """
        mappings = {
            "Input should be greater than": f"{field.title()} is too small",
            "Input should be less than": f"{field.title()} is too large",
            "Input should be a valid integer": f"{field.title()} must be a whole number",
            "Input should be a valid boolean": f"{field.title()} must be true or false",
            "Input should be '": f"{field.title()} must be one of the allowed values",
        }

        for pattern, friendly_msg in mappings.items():
            if pattern in technical_msg:
                return friendly_msg

        # Default fallback
        return f"Invalid {field}"
