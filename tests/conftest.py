from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

COURSE_UUID = "5a2d4f3c-1b6e-4c8d-9f0a-2b3c4d5e6f70"
QUESTION_UUID = "0b1c2d3e-4f50-4617-8293-a4b5c6d7e8f9"
INSTANCE_UUID = "7e8f9a0b-1c2d-43e4-85f6-a7b8c9d0e1f2"
ASSESSMENT_UUID = "c3d4e5f6-a7b8-49c0-81d2-e3f4a5b6c7d8"

WriteJson = Callable[..., Path]


def write_json(path: Path, payload: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(payload, str):
        path.write_text(payload, encoding="utf-8")
    else:
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return path


def course_info(**overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "uuid": COURSE_UUID,
        "name": "TAM 212",
        "title": "Introductory Dynamics",
        "timezone": "America/Chicago",
        "topics": [{"name": "Vectors", "color": "blue3"}],
    }
    payload.update(overrides)
    return payload


def question_info(**overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"uuid": QUESTION_UUID, "title": "Add two vectors", "topic": "Vectors"}
    payload.update(overrides)
    return payload


def course_instance_info(**overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"uuid": INSTANCE_UUID, "longName": "Fall 2021"}
    payload.update(overrides)
    return payload


def assessment_info(**overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "uuid": ASSESSMENT_UUID,
        "type": "Homework",
        "title": "Vectors",
        "set": "Homework",
        "number": "1",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def course_dir(tmp_path: Path) -> Path:
    """A small course that loads without errors or warnings."""
    root = tmp_path / "course"
    write_json(root / "infoCourse.json", course_info())
    write_json(root / "questions" / "addVectors" / "info.json", question_info())
    write_json(root / "courseInstances" / "Fa21" / "infoCourseInstance.json", course_instance_info())
    write_json(
        root / "courseInstances" / "Fa21" / "assessments" / "hw1" / "infoAssessment.json",
        assessment_info(allowAccess=[{"startDate": "2021-08-23T00:00:01", "endDate": "2021-12-15T23:59:59"}]),
    )
    return root
