"""Load ``infoCourse.json`` and merge in the built-in tag and assessment-set catalogs."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple, TypeVar

from coursedb.core.infofile import InfoFile, add_warning, has_errors
from coursedb.schemas import SchemaName

from .info_loader import load_info_file
from .models import AssessmentSet, Course, CourseOptions, Tag, Topic

LOGGER = logging.getLogger(__name__)

COURSE_INFO_FILENAME = "infoCourse.json"

EXAMPLE_COURSE_UUID = "fcc5282c-a752-4146-9bd6-ee19aac53fc5"
EXAMPLE_COURSE_TITLE = "Example Course"
EXAMPLE_COURSE_NAME = "XC 101"

DEFAULT_ASSESSMENT_SETS: Tuple[AssessmentSet, ...] = (
    AssessmentSet(abbreviation="HW", name="Homework", heading="Homeworks", color="green1"),
    AssessmentSet(abbreviation="Q", name="Quiz", heading="Quizzes", color="red1"),
    AssessmentSet(abbreviation="PQ", name="Practice Quiz", heading="Practice Quizzes", color="pink1"),
    AssessmentSet(abbreviation="E", name="Exam", heading="Exams", color="brown1"),
    AssessmentSet(abbreviation="PE", name="Practice Exam", heading="Practice Exams", color="yellow1"),
    AssessmentSet(abbreviation="P", name="Prep", heading="Question Preparation", color="gray1"),
    AssessmentSet(abbreviation="MP", name="Machine Problem", heading="Machine Problems", color="turquoise1"),
)

_SEMESTER_TAGS = tuple(
    Tag(name=f"{term}{year}", color="gray1") for year in range(15, 22) for term in ("Sp", "Su", "Fa")
)

DEFAULT_TAGS: Tuple[Tag, ...] = (
    Tag(name="numeric", color="brown1", description="The answer format is one or more numerical values."),
    Tag(name="symbolic", color="blue1", description="The answer format is a symbolic expression."),
    Tag(
        name="drawing",
        color="yellow1",
        description="The answer format requires drawing on a canvas to input a graphical representation of an answer.",
    ),
    Tag(
        name="MC",
        color="green1",
        description=(
            "The answer format is choosing from a small finite set of answers "
            "(multiple choice, possibly with multiple selections allowed, up to 10 possible answers)."
        ),
    ),
    Tag(name="code", color="turquoise1", description="The answer format is a piece of code."),
    Tag(
        name="multianswer",
        color="orange2",
        description="The question requires multiple answers, either as steps in a sequence or as separate questions.",
    ),
    Tag(name="graph", color="purple1", description="The question tests reading information from a graph or drawing a graph."),
    Tag(name="concept", color="pink1", description="The question tests conceptual understanding of a topic."),
    Tag(
        name="calculate",
        color="green2",
        description="The questions tests performing a numerical calculation, with either a calculator or equivalent software.",
    ),
    Tag(
        name="compute",
        color="purple1",
        description=(
            "The question tests the writing and running of a piece of code to compute the answer. "
            "The answer itself is not the code, but could be a numeric answer output by the code, "
            "for example (use `code` when the answer is the code)."
        ),
    ),
    Tag(name="software", color="orange1", description="The question tests the use of a specific piece of software (e.g., Matlab)."),
    Tag(
        name="estimation",
        color="red2",
        description="Answering the question correctly will require some amount of estimation, so an exact answer is not possible.",
    ),
    Tag(
        name="secret",
        color="red3",
        description=(
            "Only use this question on exams or quizzes that won't be released to students, "
            "so the question can be kept secret."
        ),
    ),
    Tag(
        name="nontest",
        color="green3",
        description=(
            "This question is not appropriate for use in a restricted testing environment, "
            "so only use it on homeworks or similar."
        ),
    ),
) + _SEMESTER_TAGS

M = TypeVar("M", Tag, AssessmentSet)


def merge_defaults(
    declared: Sequence[M],
    defaults: Sequence[M],
    info: InfoFile,
    *,
    label: str,
) -> List[M]:
    """Append each default whose name is not already declared.

    A declared entry that shadows a default is kept as-is and produces a
    warning on ``info``. Returns a new list.
    """
    merged = list(declared)
    names = {entry.name for entry in declared}
    for entry in defaults:
        if entry.name in names:
            add_warning(info, f'Default {label} "{entry.name}" should not be included in {COURSE_INFO_FILENAME}')
        else:
            merged.append(entry)
            names.add(entry.name)
    return merged


def is_example_course(info: Dict[str, Any]) -> bool:
    return (
        info.get("uuid") == EXAMPLE_COURSE_UUID
        and info.get("title") == EXAMPLE_COURSE_TITLE
        and info.get("name") == EXAMPLE_COURSE_NAME
    )


async def load_course_info(course_dir: Path) -> InfoFile[Course]:
    """Load and enrich the root course descriptor.

    Files that failed to load or validate are returned untouched.
    """
    course_dir = Path(course_dir)
    loaded = await load_info_file(course_dir / COURSE_INFO_FILENAME, SchemaName.INFO_COURSE)
    if not isinstance(loaded, InfoFile):
        # The course root itself is not a directory.
        return InfoFile(errors=[f"Course directory {course_dir} is not a directory"])
    if has_errors(loaded):
        return loaded

    info = loaded.data
    assessment_sets = merge_defaults(
        [AssessmentSet.model_validate(entry) for entry in info.get("assessmentSets") or []],
        DEFAULT_ASSESSMENT_SETS,
        loaded,
        label="assessmentSet",
    )
    tags = merge_defaults(
        [Tag.model_validate(entry) for entry in info.get("tags") or []],
        DEFAULT_TAGS,
        loaded,
        label="tag",
    )

    options = info.get("options") or {}
    course = Course(
        uuid=info["uuid"].lower(),
        path=str(course_dir),
        name=info["name"],
        title=info["title"],
        timezone=info.get("timezone"),
        topics=[Topic.model_validate(entry) for entry in info.get("topics") or []],
        assessment_sets=assessment_sets,
        tags=tags,
        options=CourseOptions(
            use_new_question_renderer=options.get("useNewQuestionRenderer", False),
            is_example_course=is_example_course(info),
        ),
    )
    LOGGER.debug("Loaded course %s (%s)", course.name, course.uuid)
    loaded.data = course
    return loaded


__all__ = [
    "COURSE_INFO_FILENAME",
    "DEFAULT_ASSESSMENT_SETS",
    "DEFAULT_TAGS",
    "is_example_course",
    "load_course_info",
    "merge_defaults",
]
