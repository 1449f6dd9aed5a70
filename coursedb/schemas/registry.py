"""
JSON Schema registry for course info files.

Schemas live next to this module as ``<name>.json``. Each one is read and
compiled at most once per process; compilation is a pure function of the
schema file, so the cache is shared by every concurrent loader task.
"""

from __future__ import annotations

import functools
import json
import logging
from enum import StrEnum
from pathlib import Path
from typing import Any, Dict, Iterable

from jsonschema import ValidationError as SchemaError
from jsonschema.protocols import Validator
from jsonschema.validators import validator_for

from coursedb.core.validation import ValidationResult

SCHEMA_DIR = Path(__file__).resolve().parent
LOGGER = logging.getLogger(__name__)


class SchemaName(StrEnum):
    INFO_COURSE = "infoCourse"
    INFO_QUESTION = "infoQuestion"
    INFO_COURSE_INSTANCE = "infoCourseInstance"
    INFO_ASSESSMENT = "infoAssessment"
    QUESTION_OPTIONS_CALCULATION = "questionOptionsCalculation"
    QUESTION_OPTIONS_SHORT_ANSWER = "questionOptionsShortAnswer"
    QUESTION_OPTIONS_MULTIPLE_CHOICE = "questionOptionsMultipleChoice"
    QUESTION_OPTIONS_CHECKBOX = "questionOptionsCheckbox"
    QUESTION_OPTIONS_FILE = "questionOptionsFile"
    QUESTION_OPTIONS_MULTIPLE_TRUE_FALSE = "questionOptionsMultipleTrueFalse"
    QUESTION_OPTIONS_V3 = "questionOptionsv3"


class QuestionType(StrEnum):
    """Question types accepted in ``info.json``."""

    CALCULATION = "Calculation"
    SHORT_ANSWER = "ShortAnswer"
    MULTIPLE_CHOICE = "MultipleChoice"
    CHECKBOX = "Checkbox"
    FILE = "File"
    MULTIPLE_TRUE_FALSE = "MultipleTrueFalse"
    V3 = "v3"


QUESTION_OPTIONS_SCHEMAS: Dict[QuestionType, SchemaName] = {
    QuestionType.CALCULATION: SchemaName.QUESTION_OPTIONS_CALCULATION,
    QuestionType.SHORT_ANSWER: SchemaName.QUESTION_OPTIONS_SHORT_ANSWER,
    QuestionType.MULTIPLE_CHOICE: SchemaName.QUESTION_OPTIONS_MULTIPLE_CHOICE,
    QuestionType.CHECKBOX: SchemaName.QUESTION_OPTIONS_CHECKBOX,
    QuestionType.FILE: SchemaName.QUESTION_OPTIONS_FILE,
    QuestionType.MULTIPLE_TRUE_FALSE: SchemaName.QUESTION_OPTIONS_MULTIPLE_TRUE_FALSE,
    QuestionType.V3: SchemaName.QUESTION_OPTIONS_V3,
}

_unmapped = [qtype.value for qtype in QuestionType if qtype not in QUESTION_OPTIONS_SCHEMAS]
if _unmapped:
    raise RuntimeError(f"Question types without an options schema: {', '.join(_unmapped)}")


def options_schema_for(question_type: str) -> SchemaName:
    """Return the options schema for a question type string.

    Raises:
        ValueError: If ``question_type`` is not a known question type.
    """
    try:
        qtype = QuestionType(question_type)
    except ValueError:
        raise ValueError(f"Unknown question type: {question_type!r}") from None
    return QUESTION_OPTIONS_SCHEMAS[qtype]


def _schema_path(name: str) -> Path:
    return SCHEMA_DIR / f"{name}.json"


@functools.lru_cache(maxsize=None)
def get_validator(name: str) -> Validator:
    """Load and compile a schema once per process.

    Raises:
        FileNotFoundError: If no schema file exists for ``name``.
        jsonschema.SchemaError: If the schema itself is malformed.
    """
    path = _schema_path(name)
    if not path.exists():
        raise FileNotFoundError(f"Schema not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        schema = json.load(handle)
    cls = validator_for(schema)
    cls.check_schema(schema)
    LOGGER.debug("Compiled schema %s (%s)", name, cls.__name__)
    return cls(schema)


def format_errors(errors: Iterable[SchemaError]) -> str:
    """Render validator errors as ``"<path>: <message>"`` joined by ``"; "``."""
    ordered = sorted(errors, key=lambda err: (err.json_path, err.message))
    return "; ".join(f"{err.json_path}: {err.message}" for err in ordered)


def validate_json(name: str, data: Any) -> ValidationResult:
    """Validate ``data`` against the named schema."""
    validator = get_validator(str(name))
    errors = list(validator.iter_errors(data))
    if not errors:
        return ValidationResult()
    return ValidationResult(errors=[format_errors(errors)])


__all__ = [
    "QUESTION_OPTIONS_SCHEMAS",
    "QuestionType",
    "SchemaName",
    "format_errors",
    "get_validator",
    "options_schema_for",
    "validate_json",
]
