"""Typed records for the course descriptor and the loaded course aggregate."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from coursedb.core.infofile import InfoFile


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        """Dump with the camelCase keys used in info files."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Tag(_CamelModel):
    model_config = ConfigDict(frozen=True)

    name: str
    color: str
    description: Optional[str] = None


class Topic(_CamelModel):
    name: str
    color: str
    description: Optional[str] = None


class AssessmentSet(_CamelModel):
    model_config = ConfigDict(frozen=True)

    abbreviation: str
    name: str
    heading: str
    color: str


class CourseOptions(_CamelModel):
    use_new_question_renderer: bool = False
    is_example_course: bool = False


class Course(_CamelModel):
    """The enriched ``infoCourse.json`` record."""

    uuid: str
    name: str
    title: str
    path: str
    timezone: Optional[str] = None
    options: CourseOptions = Field(default_factory=CourseOptions)
    tags: List[Tag] = Field(default_factory=list)
    topics: List[Topic] = Field(default_factory=list)
    assessment_sets: List[AssessmentSet] = Field(default_factory=list)


@dataclass
class CourseInstanceData:
    course_instance: InfoFile[Dict[str, Any]]
    assessments: Dict[str, InfoFile[Dict[str, Any]]] = field(default_factory=dict)


@dataclass
class CourseData:
    """Everything one scan of a course directory produced."""

    course: InfoFile[Course]
    questions: Dict[str, InfoFile[Dict[str, Any]]] = field(default_factory=dict)
    course_instances: Dict[str, CourseInstanceData] = field(default_factory=dict)


@dataclass
class MissingUuid:
    path: str
    errors: List[str]


__all__ = [
    "AssessmentSet",
    "Course",
    "CourseData",
    "CourseInstanceData",
    "CourseOptions",
    "MissingUuid",
    "Tag",
    "Topic",
]
