"""Loaders that turn a course directory into a :class:`CourseData` tree."""

from __future__ import annotations

from .course_db import (
    get_paths_with_missing_uuids,
    has_any_errors,
    iter_issues,
    load_assessments,
    load_course_db,
    load_course_instances,
    load_full_course,
    load_questions,
    load_single_question,
)
from .course_info import DEFAULT_ASSESSMENT_SETS, DEFAULT_TAGS, load_course_info
from .entities import check_duplicate_uuids, load_and_validate_json, load_info_for_directory
from .info_loader import load_info_file
from .models import AssessmentSet, Course, CourseData, CourseInstanceData, CourseOptions, MissingUuid, Tag, Topic

__all__ = [
    "AssessmentSet",
    "Course",
    "CourseData",
    "CourseInstanceData",
    "CourseOptions",
    "DEFAULT_ASSESSMENT_SETS",
    "DEFAULT_TAGS",
    "MissingUuid",
    "Tag",
    "Topic",
    "check_duplicate_uuids",
    "get_paths_with_missing_uuids",
    "has_any_errors",
    "iter_issues",
    "load_and_validate_json",
    "load_assessments",
    "load_course_db",
    "load_course_info",
    "load_course_instances",
    "load_full_course",
    "load_info_file",
    "load_info_for_directory",
    "load_questions",
    "load_single_question",
]
