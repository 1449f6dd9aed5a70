"""
JSON Schema definitions and validation for course info files.
"""

from .registry import (
    QUESTION_OPTIONS_SCHEMAS,
    QuestionType,
    SchemaName,
    format_errors,
    get_validator,
    options_schema_for,
    validate_json,
)

__all__ = [
    "QUESTION_OPTIONS_SCHEMAS",
    "QuestionType",
    "SchemaName",
    "format_errors",
    "get_validator",
    "options_schema_for",
    "validate_json",
]
