"""Business-rule checks that run after an info file passed its schema."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from coursedb.core.validation import ValidationResult
from coursedb.schemas import options_schema_for, validate_json


def validate_question(question: Dict[str, Any]) -> ValidationResult:
    """Check ``options`` against the schema for the question's ``type``."""
    result = ValidationResult()
    question_type = question.get("type")
    options = question.get("options")
    # Falsy options other than an empty container mean "no options".
    if not question_type or options is None or options in (False, 0, ""):
        return result

    try:
        schema = options_schema_for(question_type)
        options_result = validate_json(schema, options)
    except (ValueError, FileNotFoundError) as exc:
        result.errors.append(str(exc))
        return result

    for message in options_result.errors:
        result.errors.append(f"Invalid options for {question_type} question: {message}")
    return result


def _parse_date(value: Any) -> Optional[datetime]:
    if not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def validate_assessment(assessment: Dict[str, Any]) -> ValidationResult:
    """Check that every access rule has parseable, correctly ordered dates."""
    result = ValidationResult()
    for rule in assessment.get("allowAccess") or []:
        start_date = end_date = None
        if "startDate" in rule:
            start_date = _parse_date(rule["startDate"])
            if start_date is None:
                result.errors.append(f"Invalid allowAccess startDate: {rule['startDate']}")
        if "endDate" in rule:
            end_date = _parse_date(rule["endDate"])
            if end_date is None:
                result.errors.append(f"Invalid allowAccess endDate: {rule['endDate']}")
        if start_date and end_date and start_date > end_date:
            result.errors.append(
                f"Invalid allowAccess rule: startDate ({rule['startDate']}) must not be after endDate ({rule['endDate']})"
            )
    return result


def validate_course_instance(course_instance: Dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    if "allowIssueReporting" in course_instance:
        if course_instance["allowIssueReporting"]:
            result.warnings.append('"allowIssueReporting" is no longer needed.')
        else:
            # A false value used to hide issue reporting; that switch now lives on assessments.
            result.errors.append(
                '"allowIssueReporting" is no longer permitted in "infoCourseInstance.json". '
                'Instead, set "allowIssueReporting" in "infoAssessment.json" files.'
            )
    return result


__all__ = ["validate_assessment", "validate_course_instance", "validate_question"]
