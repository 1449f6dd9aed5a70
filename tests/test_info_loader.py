from __future__ import annotations

import json
import re
from pathlib import Path

import anyio
import pytest

from conftest import QUESTION_UUID, question_info, write_json
from coursedb.core.infofile import NotApplicable
from coursedb.core.validation import InfoFileConsistencyError
from coursedb.schemas import SchemaName
from coursedb.sync import info_loader
from coursedb.sync.info_loader import load_info_file


def _load(path: Path, schema: str | None = None):
    return anyio.run(load_info_file, path, schema)


def test_valid_json_without_schema_returns_raw_data(tmp_path: Path) -> None:
    payload = {"uuid": QUESTION_UUID, "anything": [1, 2, 3]}
    path = write_json(tmp_path / "info.json", payload)

    result = _load(path)

    assert result.uuid == QUESTION_UUID
    assert result.data == payload
    assert result.errors == []
    assert result.warnings == []


def test_missing_uuid_is_a_single_error(tmp_path: Path) -> None:
    path = write_json(tmp_path / "info.json", {"title": "no uuid"})

    result = _load(path)

    assert result.errors == ["UUID is missing"]
    assert result.data is None
    assert result.uuid is None


def test_top_level_array_has_no_uuid(tmp_path: Path) -> None:
    path = write_json(tmp_path / "info.json", [{"uuid": QUESTION_UUID}])

    assert _load(path).errors == ["UUID is missing"]


@pytest.mark.parametrize("bad_uuid", ["not-a-uuid", "1234", 42])
def test_malformed_uuid_is_rejected(tmp_path: Path, bad_uuid) -> None:
    path = write_json(tmp_path / "info.json", {"uuid": bad_uuid})

    result = _load(path)

    assert result.errors == ["UUID is not a valid v4 UUID"]
    assert result.data is None


def test_invalid_json_with_one_uuid_reports_line_and_column(tmp_path: Path) -> None:
    text = '{\n  "uuid": "%s",\n  "title": "Broken",\n}\n' % QUESTION_UUID
    path = write_json(tmp_path / "info.json", text)

    result = _load(path)

    assert result.uuid == QUESTION_UUID
    assert result.data is None
    assert len(result.errors) == 1
    assert re.match(r"Error parsing JSON \(line \d+, column \d+\): \S", result.errors[0])


def test_invalid_json_without_uuid(tmp_path: Path) -> None:
    path = write_json(tmp_path / "info.json", '{"title": "Broken",}')

    result = _load(path)

    assert result.errors == ["UUID not found in file"]
    assert result.uuid is None


def test_invalid_json_with_two_uuids(tmp_path: Path) -> None:
    text = '{"uuid": "%s", "other": {"uuid": "%s"},}' % (QUESTION_UUID, QUESTION_UUID)
    path = write_json(tmp_path / "info.json", text)

    result = _load(path)

    assert result.errors == ["More than one UUID found in file"]
    assert result.uuid is None


def test_parent_that_is_a_file_is_not_applicable(tmp_path: Path) -> None:
    stray = tmp_path / ".DS_Store"
    stray.write_text("junk", encoding="utf-8")

    assert _load(stray / "info.json") is NotApplicable.SKIP


def test_missing_file_is_an_error(tmp_path: Path) -> None:
    (tmp_path / "q1").mkdir()

    result = _load(tmp_path / "q1" / "info.json")

    assert len(result.errors) == 1
    assert "No such file" in result.errors[0]
    assert result.data is None


def test_schema_failure_keeps_uuid_but_drops_data(tmp_path: Path) -> None:
    path = write_json(tmp_path / "info.json", {"uuid": QUESTION_UUID, "title": "No topic"})

    result = _load(path, SchemaName.INFO_QUESTION)

    assert result.uuid == QUESTION_UUID
    assert result.data is None
    assert len(result.errors) == 1
    assert "'topic' is a required property" in result.errors[0]


def test_schema_success_returns_data(tmp_path: Path) -> None:
    path = write_json(tmp_path / "info.json", question_info())

    result = _load(path, SchemaName.INFO_QUESTION)

    assert result.errors == []
    assert result.data["title"] == "Add two vectors"


def test_byte_order_mark_is_tolerated(tmp_path: Path) -> None:
    path = tmp_path / "info.json"
    path.write_text("\ufeff" + json.dumps({"uuid": QUESTION_UUID}), encoding="utf-8")

    result = _load(path)

    assert result.errors == []
    assert result.uuid == QUESTION_UUID


def test_repeated_byte_order_marks_are_tolerated(tmp_path: Path) -> None:
    path = tmp_path / "info.json"
    path.write_text("\ufeff\ufeff" + json.dumps({"uuid": QUESTION_UUID}), encoding="utf-8")

    result = _load(path)

    assert result.errors == []
    assert result.data == {"uuid": QUESTION_UUID}


@pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
def test_non_finite_constants_are_invalid_json(tmp_path: Path, constant: str) -> None:
    path = write_json(tmp_path / "info.json", '{"uuid": "%s", "x": %s}' % (QUESTION_UUID, constant))

    result = _load(path)

    assert result.uuid == QUESTION_UUID
    assert result.data is None
    assert len(result.errors) == 1
    assert re.match(r"Error parsing JSON \(line 1, column \d+\): ", result.errors[0])


def test_parsers_disagreeing_aborts(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = write_json(tmp_path / "info.json", '{"uuid": "%s",}' % QUESTION_UUID)
    monkeypatch.setattr(info_loader.simplejson, "loads", lambda text, **kwargs: {})

    with pytest.raises(InfoFileConsistencyError):
        _load(path)
