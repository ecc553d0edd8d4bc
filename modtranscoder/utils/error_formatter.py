# -*- coding: utf-8 -*-
"""Location: ./modtranscoder/utils/error_formatter.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Centralized formatting for Pydantic validation errors.

Structured text (JSON command lists, whole material documents) is validated
against the canonical pydantic models. When that fails the raw pydantic error
is too technical to show in an editor status bar, so this module turns it into
a short message plus one entry per offending field.

Examples:
    >>> from pydantic import BaseModel, ValidationError
    >>> class Sample(BaseModel):
    ...     name: str
    >>> try:
    ...     Sample(name=3)
    ... except ValidationError as e:
    ...     result = ErrorFormatter.format_validation_error(e)
    >>> result['details'][0]['field']
    'name'
    >>> result['details'][0]['message']
    'name must be text'
"""

# Standard
import logging
from typing import Any, Dict, Sequence, Union

# Third-Party
from pydantic import ValidationError

logger = logging.getLogger(__name__)


class ErrorFormatter:
    """Transform pydantic validation errors into editor-friendly messages.

    Examples:
        >>> formatter = ErrorFormatter()
        >>> isinstance(formatter, ErrorFormatter)
        True
    """

    @staticmethod
    def format_validation_error(error: ValidationError) -> Dict[str, Any]:
        """Convert Pydantic errors to a user-friendly format.

        Args:
            error (ValidationError): The Pydantic validation error to format

        Returns:
            Dict[str, Any]: A dictionary with formatted error details containing:
                - message: General error description (first problem found)
                - details: List of field-specific errors
                - success: Always False for errors

        Examples:
            >>> from typing import List
            >>> from pydantic import BaseModel, ValidationError
            >>> class Cmd(BaseModel):
            ...     args: List[str]
            >>> try:
            ...     Cmd(args=["ok", 5])
            ... except ValidationError as e:
            ...     result = ErrorFormatter.format_validation_error(e)
            >>> result['details'][0]['field']
            'args.1'
            >>> result['message']
            'Validation failed: args.1 must be text'
            >>> result['success']
            False
        """
        errors = []
        user_message = "invalid document"

        for err in error.errors():
            field = ErrorFormatter._format_location(err.get("loc", ()))
            msg = err.get("msg", "Invalid value")

            user_message = ErrorFormatter._get_user_message(field, msg)
            errors.append({"field": field, "message": user_message})

        # Log the full error for debugging
        logger.debug("Validation error: %s", error)

        first = errors[0]["message"] if errors else user_message
        return {"message": f"Validation failed: {first}", "details": errors, "success": False}

    @staticmethod
    def _format_location(loc: Sequence[Union[str, int]]) -> str:
        """Join a pydantic error location into a dotted path.

        Args:
            loc: Location tuple from ``ValidationError.errors()``.

        Returns:
            str: Dotted path, or ``"document"`` for root-level errors.

        Examples:
            >>> ErrorFormatter._format_location(("Commands", 2, "Args"))
            'Commands.2.Args'
            >>> ErrorFormatter._format_location(())
            'document'
        """
        if not loc:
            return "document"
        return ".".join(str(part) for part in loc)

    @staticmethod
    def _get_user_message(field: str, technical_msg: str) -> str:
        """Map technical validation messages to user-friendly ones.

        Args:
            field (str): The field path that failed validation
            technical_msg (str): The technical validation message from Pydantic

        Returns:
            str: User-friendly error message with field context

        Examples:
            >>> ErrorFormatter._get_user_message("Args.0", "Input should be a valid string")
            'Args.0 must be text'
            >>> ErrorFormatter._get_user_message("Args", "Input should be a valid list")
            'Args must be a list'
            >>> ErrorFormatter._get_user_message("Color", "Tuple should have at most 4 items after validation, not 5")
            'Color has the wrong number of components'
            >>> ErrorFormatter._get_user_message("Material", "Field required")
            'Material is required'
            >>> ErrorFormatter._get_user_message("x", "Some unknown error")
            'Invalid x: Some unknown error'
        """
        mappings = {
            "Input should be a valid string": f"{field} must be text",
            "Input should be a valid list": f"{field} must be a list",
            "Input should be a valid tuple": f"{field} must be a list",
            "Input should be a valid number": f"{field} must be a number",
            "Input should be a valid integer": f"{field} must be a whole number",
            "Input should be a valid boolean": f"{field} must be true or false",
            "Input should be a valid dictionary": f"{field} must be an object",
            "Input should be an object": f"{field} must be an object",
            "Tuple should have": f"{field} has the wrong number of components",
            "Field required": f"{field} is required",
        }

        for pattern, friendly_msg in mappings.items():
            if pattern in technical_msg:
                return friendly_msg

        # Default fallback keeps the technical text for anything unmapped
        return f"Invalid {field}: {technical_msg}"
