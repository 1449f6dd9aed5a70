"""
Build the full in-memory model of a course directory.

Layout consumed::

    <course>/infoCourse.json
    <course>/questions/<qid>/info.json
    <course>/courseInstances/<ciid>/infoCourseInstance.json
    <course>/courseInstances/<ciid>/assessments/<tid>/infoAssessment.json

Every entity's problems are recorded on its own ``InfoFile``; the scan
finishes even when individual files are broken. ``load_course_db`` is the
all-or-nothing front end for callers that cannot handle partial results.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Iterator, List, Tuple

import anyio

from coursedb.core.infofile import InfoFile, NotApplicable, has_errors, has_uuid, stringify_errors
from coursedb.core.validation import CourseLoadError, unwrap_consistency_fault
from coursedb.schemas import SchemaName

from .course_info import COURSE_INFO_FILENAME, load_course_info
from .entities import check_duplicate_uuids, load_and_validate_json, load_info_for_directory
from .models import Course, CourseData, CourseInstanceData, MissingUuid
from .validators import validate_assessment, validate_course_instance, validate_question

LOGGER = logging.getLogger(__name__)

QUESTIONS_DIR = "questions"
COURSE_INSTANCES_DIR = "courseInstances"
ASSESSMENTS_DIR = "assessments"
QUESTION_INFO_FILENAME = "info.json"
COURSE_INSTANCE_INFO_FILENAME = "infoCourseInstance.json"
ASSESSMENT_INFO_FILENAME = "infoAssessment.json"

DEFAULT_QUESTION_INFO: Dict[str, Any] = {
    "type": "Calculation",
    "clientFiles": ["client.js", "question.html", "answer.html"],
}
DEFAULT_COURSE_INSTANCE_INFO: Dict[str, Any] = {}
DEFAULT_ASSESSMENT_INFO: Dict[str, Any] = {}


def _question_path(qid: str) -> str:
    return str(PurePosixPath(QUESTIONS_DIR, qid, QUESTION_INFO_FILENAME))


def _course_instance_path(ciid: str) -> str:
    return str(PurePosixPath(COURSE_INSTANCES_DIR, ciid, COURSE_INSTANCE_INFO_FILENAME))


def _assessment_path(ciid: str, tid: str) -> str:
    return str(PurePosixPath(COURSE_INSTANCES_DIR, ciid, ASSESSMENTS_DIR, tid, ASSESSMENT_INFO_FILENAME))


async def load_questions(course_dir: Path) -> Dict[str, InfoFile]:
    """Load every question in a course, keyed by qid."""
    questions = await load_info_for_directory(
        "qid",
        Path(course_dir) / QUESTIONS_DIR,
        QUESTION_INFO_FILENAME,
        DEFAULT_QUESTION_INFO,
        SchemaName.INFO_QUESTION,
        validate_question,
    )
    check_duplicate_uuids(questions, lambda uuid, ids: f"UUID {uuid} is used in other questions: {', '.join(ids)}")
    return questions


async def load_course_instances(course_dir: Path) -> Dict[str, InfoFile]:
    """Load every course instance in a course, keyed by ciid."""
    course_instances = await load_info_for_directory(
        "ciid",
        Path(course_dir) / COURSE_INSTANCES_DIR,
        COURSE_INSTANCE_INFO_FILENAME,
        DEFAULT_COURSE_INSTANCE_INFO,
        SchemaName.INFO_COURSE_INSTANCE,
        validate_course_instance,
    )
    check_duplicate_uuids(
        course_instances,
        lambda uuid, ids: f"UUID {uuid} is used in other course instances: {', '.join(ids)}",
    )
    return course_instances


async def load_assessments(course_dir: Path, course_instance: str) -> Dict[str, InfoFile]:
    """Load every assessment in one course instance, keyed by tid."""
    assessments = await load_info_for_directory(
        "tid",
        Path(course_dir) / COURSE_INSTANCES_DIR / course_instance / ASSESSMENTS_DIR,
        ASSESSMENT_INFO_FILENAME,
        DEFAULT_ASSESSMENT_INFO,
        SchemaName.INFO_ASSESSMENT,
        validate_assessment,
    )
    check_duplicate_uuids(assessments, lambda uuid, ids: f"UUID {uuid} is used in other assessments: {', '.join(ids)}")
    return assessments


async def load_full_course(course_dir: Path) -> CourseData:
    """
    Scan a course directory into a :class:`CourseData`.

    The course descriptor, questions, and course instances load
    concurrently. Assessments are loaded once every course instance is known,
    again concurrently across instances.

    Raises:
        InfoFileConsistencyError: If the JSON parsers disagree about a file.
    """
    course_dir = Path(course_dir)
    loaded: Dict[str, Any] = {}

    async def _run(key: str, loader) -> None:
        loaded[key] = await loader(course_dir)

    with unwrap_consistency_fault():
        async with anyio.create_task_group() as tg:
            tg.start_soon(_run, "course", load_course_info)
            tg.start_soon(_run, "questions", load_questions)
            tg.start_soon(_run, "course_instances", load_course_instances)

    assessments: Dict[str, Dict[str, InfoFile]] = {}

    async def _load_assessments(ciid: str) -> None:
        assessments[ciid] = await load_assessments(course_dir, ciid)

    with unwrap_consistency_fault():
        async with anyio.create_task_group() as tg:
            for ciid in loaded["course_instances"]:
                tg.start_soon(_load_assessments, ciid)

    course_instances = {
        ciid: CourseInstanceData(course_instance=info, assessments=assessments[ciid])
        for ciid, info in loaded["course_instances"].items()
    }
    course_data = CourseData(
        course=loaded["course"],
        questions=loaded["questions"],
        course_instances=course_instances,
    )
    LOGGER.info(
        "Loaded course %s: %d questions, %d course instances, %d assessments",
        course_dir,
        len(course_data.questions),
        len(course_instances),
        sum(len(ci.assessments) for ci in course_instances.values()),
    )
    return course_data


def get_paths_with_missing_uuids(course_data: CourseData) -> List[MissingUuid]:
    """List every info file without a uuid, relative to the course root."""
    paths: List[MissingUuid] = []
    if not has_uuid(course_data.course):
        paths.append(MissingUuid(path=COURSE_INFO_FILENAME, errors=course_data.course.errors))
    for qid, info in course_data.questions.items():
        if not has_uuid(info):
            paths.append(MissingUuid(path=_question_path(qid), errors=info.errors))
    for ciid, instance in course_data.course_instances.items():
        if not has_uuid(instance.course_instance):
            paths.append(MissingUuid(path=_course_instance_path(ciid), errors=instance.course_instance.errors))
        for tid, info in instance.assessments.items():
            if not has_uuid(info):
                paths.append(MissingUuid(path=_assessment_path(ciid, tid), errors=info.errors))
    return paths


def iter_info_files(course_data: CourseData) -> Iterator[Tuple[str, InfoFile]]:
    """Yield ``(relative_path, info)`` for every entity, course first."""
    yield COURSE_INFO_FILENAME, course_data.course
    for qid, info in course_data.questions.items():
        yield _question_path(qid), info
    for ciid, instance in course_data.course_instances.items():
        yield _course_instance_path(ciid), instance.course_instance
    for ciid, instance in course_data.course_instances.items():
        for tid, info in instance.assessments.items():
            yield _assessment_path(ciid, tid), info


def iter_issues(course_data: CourseData) -> Iterator[Tuple[str, str, str]]:
    """Yield ``(relative_path, severity, message)`` for every error and warning."""
    for path, info in iter_info_files(course_data):
        for message in info.errors:
            yield path, "error", message
        for message in info.warnings:
            yield path, "warning", message


def has_any_errors(course_data: CourseData) -> bool:
    return any(has_errors(info) for _, info in iter_info_files(course_data))


def _raise_first_error(course_data: CourseData) -> None:
    for path, info in iter_info_files(course_data):
        if has_errors(info):
            raise CourseLoadError(f"{path}: {stringify_errors(info)}")


async def load_single_question(course_dir: Path, qid: str) -> Dict[str, Any]:
    """Load one question and return its data.

    Raises:
        CourseLoadError: If the question has any errors.
    """
    info_path = Path(course_dir) / QUESTIONS_DIR / qid / QUESTION_INFO_FILENAME
    result = await load_and_validate_json(
        qid, "qid", info_path, DEFAULT_QUESTION_INFO, SchemaName.INFO_QUESTION, validate_question
    )
    if result is NotApplicable.SKIP:
        raise CourseLoadError(f"Question directory {info_path.parent} is not a directory")
    if has_errors(result):
        raise CourseLoadError(stringify_errors(result))
    return result.data


async def load_course_db(course_dir: Path) -> Tuple[Dict[str, Any], CourseData]:
    """
    Load a course and flatten it into plain dictionaries.

    The whole directory is scanned first; only then is the first error found
    (course, questions, course instances, assessments, in that order) raised.

    Returns:
        ``({"courseInfo", "questionDB", "courseInstanceDB"}, course_data)``
        where each course instance carries its assessments under
        ``assessmentDB``.

    Raises:
        CourseLoadError: If any entity in the course has errors.
    """
    course_data = await load_full_course(course_dir)
    _raise_first_error(course_data)

    course: Course = course_data.course.data
    question_db = {qid: info.data for qid, info in course_data.questions.items()}
    course_instance_db = {
        ciid: {
            **instance.course_instance.data,
            "assessmentDB": {tid: info.data for tid, info in instance.assessments.items()},
        }
        for ciid, instance in course_data.course_instances.items()
    }
    legacy = {
        "courseInfo": course.to_dict(),
        "questionDB": question_db,
        "courseInstanceDB": course_instance_db,
    }
    return legacy, course_data


__all__ = [
    "DEFAULT_ASSESSMENT_INFO",
    "DEFAULT_COURSE_INSTANCE_INFO",
    "DEFAULT_QUESTION_INFO",
    "get_paths_with_missing_uuids",
    "has_any_errors",
    "iter_info_files",
    "iter_issues",
    "load_assessments",
    "load_course_db",
    "load_course_instances",
    "load_full_course",
    "load_questions",
    "load_single_question",
]
