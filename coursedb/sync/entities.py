"""Shared helpers for loading every entity in a directory of info files."""

from __future__ import annotations

import copy
import logging
import os
from collections import defaultdict
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping

import anyio
from anyio import to_thread

from coursedb.core.infofile import InfoFile, LoadResult, NotApplicable, add_error, has_errors
from coursedb.core.validation import ValidationResult, unwrap_consistency_fault

from .info_loader import load_info_file

LOGGER = logging.getLogger(__name__)

EntityValidator = Callable[[Dict[str, Any]], ValidationResult]


async def load_and_validate_json(
    entity_id: str,
    id_name: str,
    json_path: Path,
    defaults: Mapping[str, Any],
    schema: str,
    validate: EntityValidator,
) -> LoadResult[Dict[str, Any]]:
    """
    Load one entity and run its semantic checks.

    The directory-derived ``entity_id`` is stored under ``id_name``,
    overwriting whatever the file said. Semantic errors discard the data
    and uuid; otherwise missing fields are filled from ``defaults`` and the
    validator's warnings are attached.
    """
    loaded = await load_info_file(json_path, schema)
    if loaded is NotApplicable.SKIP:
        return loaded
    if has_errors(loaded):
        return loaded

    data = loaded.data
    data[id_name] = entity_id

    result = validate(data)
    if not result.valid:
        return InfoFile(errors=list(result.errors))

    for key, value in defaults.items():
        if key not in data:
            data[key] = copy.deepcopy(value)
    loaded.warnings = list(result.warnings)
    return loaded


def _list_entries(directory: Path) -> List[str]:
    with os.scandir(directory) as entries:
        return [entry.name for entry in entries]


async def load_info_for_directory(
    id_name: str,
    directory: Path,
    info_filename: str,
    defaults: Mapping[str, Any],
    schema: str,
    validate: EntityValidator,
) -> Dict[str, InfoFile]:
    """Load and validate the info file inside every subdirectory of ``directory``.

    Entries load concurrently; one entity's failure is recorded only against
    that entity. A missing ``directory`` yields an empty mapping.
    """
    try:
        names = await to_thread.run_sync(_list_entries, directory)
    except FileNotFoundError:
        LOGGER.debug("No %s directory at %s", id_name, directory)
        return {}

    infos: Dict[str, InfoFile] = {}

    async def _load_entry(name: str) -> None:
        info = await load_and_validate_json(name, id_name, directory / name / info_filename, defaults, schema, validate)
        if info is not NotApplicable.SKIP:
            infos[name] = info

    with unwrap_consistency_fault():
        async with anyio.create_task_group() as tg:
            for name in names:
                tg.start_soon(_load_entry, name)

    LOGGER.debug("Loaded %d %s entries from %s", len(infos), id_name, directory)
    return infos


def check_duplicate_uuids(
    infos: Mapping[str, InfoFile],
    make_error_message: Callable[[str, List[str]], str],
) -> None:
    """Add an error to every entry whose uuid is shared with a sibling.

    Entries without data are ignored. Each offender's message lists the
    other ids using the same uuid.
    """
    uuids: Dict[str, List[str]] = defaultdict(list)
    for entity_id, info in infos.items():
        if not info.data:
            continue
        uuids[info.data["uuid"]].append(entity_id)

    for uuid, ids in uuids.items():
        if len(ids) == 1:
            continue
        for entity_id in ids:
            others = sorted(other for other in ids if other != entity_id)
            add_error(infos[entity_id], make_error_message(uuid, others))


__all__ = [
    "EntityValidator",
    "check_duplicate_uuids",
    "load_and_validate_json",
    "load_info_for_directory",
]
