"""Load a single JSON info file into an :class:`InfoFile`."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Optional

import anyio
import simplejson

from coursedb.core.infofile import InfoFile, LoadResult, NotApplicable, make_error
from coursedb.core.validation import InfoFileConsistencyError
from coursedb.schemas import validate_json

LOGGER = logging.getLogger(__name__)

_UUID = r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
UUID_REGEX = re.compile(_UUID)
# "uuid": "<uuid>" occurrences in raw file text
FILE_UUID_REGEX = re.compile(r'"uuid":\s*"(' + _UUID + r')"')


async def load_info_file(filepath: Path | str, schema: Optional[str] = None) -> LoadResult[Dict[str, Any]]:
    """
    Read, parse, and schema-check one info file.

    Returns ``NotApplicable.SKIP`` when the file's parent turned out to be a
    plain file rather than a directory. Every other expected failure is
    captured as an error on the returned :class:`InfoFile`.

    Raises:
        InfoFileConsistencyError: If the diagnostic parser accepts text that
            the strict parser rejected.
    """
    filepath = Path(filepath)
    try:
        contents = await anyio.Path(filepath).read_text(encoding="utf-8")
    except NotADirectoryError as exc:
        if exc.filename is None or Path(exc.filename) == filepath:
            # A stray file (e.g. .DS_Store) sits where an entity directory was expected.
            LOGGER.debug("Skipping %s: parent is not a directory", filepath)
            return NotApplicable.SKIP
        return make_error(str(exc))
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.debug("Unable to read %s: %s", filepath, exc)
        return make_error(str(exc))

    # Leading BOMs are dropped so both parsers see the same text.
    contents = contents.lstrip("\ufeff")
    try:
        raw = json.loads(contents, parse_constant=_reject_constant)
    except ValueError:
        return _diagnose_invalid_json(filepath, contents)

    uuid = raw.get("uuid") if isinstance(raw, dict) else None
    if not uuid:
        return make_error("UUID is missing")
    if not isinstance(uuid, str) or not UUID_REGEX.search(uuid):
        return make_error("UUID is not a valid v4 UUID")

    if schema is None:
        return InfoFile(uuid=uuid, data=raw)

    result = validate_json(schema, raw)
    if not result.valid:
        LOGGER.debug("%s failed %s schema validation", filepath, schema)
        return InfoFile(uuid=uuid, errors=list(result.errors))
    return InfoFile(uuid=uuid, data=raw)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _diagnose_invalid_json(filepath: Path, contents: str) -> InfoFile:
    matches = FILE_UUID_REGEX.findall(contents)
    if not matches:
        return make_error("UUID not found in file")
    if len(matches) > 1:
        return make_error("More than one UUID found in file")

    uuid = matches[0]
    # Only reached for text json.loads rejected, so this parse should fail too;
    # it runs purely for the line/column in its error.
    try:
        simplejson.loads(contents, allow_nan=False)
    except simplejson.JSONDecodeError as exc:
        return make_error(
            f"Error parsing JSON (line {exc.lineno}, column {exc.colno}): {exc.msg}",
            uuid=uuid,
        )
    raise InfoFileConsistencyError(f"Expected file {filepath} to have invalid JSON, but parsing succeeded.")


__all__ = ["FILE_UUID_REGEX", "UUID_REGEX", "load_info_file"]
