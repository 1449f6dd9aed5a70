from __future__ import annotations

from pathlib import Path

import anyio

from conftest import course_info, write_json
from coursedb.core.infofile import has_errors
from coursedb.sync.course_info import DEFAULT_ASSESSMENT_SETS, DEFAULT_TAGS, load_course_info

EXAMPLE_UUID = "fcc5282c-a752-4146-9bd6-ee19aac53fc5"


def _load(course_dir: Path):
    return anyio.run(load_course_info, course_dir)


def test_example_course_is_recognized(tmp_path: Path) -> None:
    write_json(tmp_path / "infoCourse.json", course_info(uuid=EXAMPLE_UUID, title="Example Course", name="XC 101"))

    course = _load(tmp_path).data

    assert course.options.is_example_course is True


def test_example_signature_needs_every_field(tmp_path: Path) -> None:
    write_json(tmp_path / "infoCourse.json", course_info(uuid=EXAMPLE_UUID, title="Example Course", name="XC 102"))

    assert _load(tmp_path).data.options.is_example_course is False


def test_defaults_are_appended(tmp_path: Path) -> None:
    write_json(tmp_path / "infoCourse.json", course_info())

    info = _load(tmp_path)

    assert info.warnings == []
    assert [s.name for s in info.data.assessment_sets] == [s.name for s in DEFAULT_ASSESSMENT_SETS]
    assert len(info.data.tags) == len(DEFAULT_TAGS)


def test_declared_default_is_kept_and_warned(tmp_path: Path) -> None:
    write_json(
        tmp_path / "infoCourse.json",
        course_info(
            tags=[{"name": "numeric", "color": "red1"}, {"name": "lab", "color": "gray2"}],
            assessmentSets=[{"abbreviation": "HW", "name": "Homework", "heading": "Problem Sets", "color": "blue1"}],
        ),
    )

    info = _load(tmp_path)

    assert info.errors == []
    assert info.warnings == [
        'Default assessmentSet "Homework" should not be included in infoCourse.json',
        'Default tag "numeric" should not be included in infoCourse.json',
    ]
    tags = {tag.name: tag for tag in info.data.tags}
    assert tags["numeric"].color == "red1"
    assert "lab" in tags
    assert len(tags) == len(info.data.tags)
    homework = [s for s in info.data.assessment_sets if s.name == "Homework"]
    assert len(homework) == 1
    assert homework[0].heading == "Problem Sets"


def test_catalogs_are_not_mutated(tmp_path: Path) -> None:
    before = (len(DEFAULT_TAGS), len(DEFAULT_ASSESSMENT_SETS))
    write_json(tmp_path / "infoCourse.json", course_info(tags=[{"name": "lab", "color": "gray2"}]))

    _load(tmp_path)
    _load(tmp_path)

    assert (len(DEFAULT_TAGS), len(DEFAULT_ASSESSMENT_SETS)) == before


def test_uuid_is_lowercased_and_path_recorded(tmp_path: Path) -> None:
    write_json(tmp_path / "infoCourse.json", course_info(uuid="5A2D4F3C-1B6E-4C8D-9F0A-2B3C4D5E6F70"))

    info = _load(tmp_path)

    assert info.data.uuid == "5a2d4f3c-1b6e-4c8d-9f0a-2b3c4d5e6f70"
    assert info.uuid == "5A2D4F3C-1B6E-4C8D-9F0A-2B3C4D5E6F70"
    assert info.data.path == str(tmp_path)


def test_new_question_renderer_option(tmp_path: Path) -> None:
    write_json(tmp_path / "infoCourse.json", course_info())
    assert _load(tmp_path).data.options.use_new_question_renderer is False

    write_json(tmp_path / "infoCourse.json", course_info(options={"useNewQuestionRenderer": True}))
    assert _load(tmp_path).data.options.use_new_question_renderer is True


def test_camel_case_dump(tmp_path: Path) -> None:
    write_json(tmp_path / "infoCourse.json", course_info())

    dumped = _load(tmp_path).data.to_dict()

    assert dumped["options"] == {"useNewQuestionRenderer": False, "isExampleCourse": False}
    assert "assessmentSets" in dumped
    assert dumped["topics"] == [{"name": "Vectors", "color": "blue3"}]


def test_invalid_course_is_returned_without_enrichment(tmp_path: Path) -> None:
    write_json(tmp_path / "infoCourse.json", course_info(title=None))

    info = _load(tmp_path)

    assert has_errors(info)
    assert info.data is None
    assert info.warnings == []


def test_missing_course_file(tmp_path: Path) -> None:
    info = _load(tmp_path)

    assert info.uuid is None
    assert len(info.errors) == 1
