"""Result container for a single loaded info file."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, List, Optional, TypeVar, Union

T = TypeVar("T")


class NotApplicable(Enum):
    """Marker for a slot that turned out not to be an entity directory.

    Returned instead of an :class:`InfoFile` when a stray file (``.DS_Store``
    and friends) sits where a subdirectory was expected. Callers skip it.
    """

    SKIP = "skip"


@dataclass
class InfoFile(Generic[T]):
    """Outcome of loading one info file.

    When ``errors`` is non-empty ``data`` is unreliable and may be ``None``.
    """

    uuid: Optional[str] = None
    data: Optional[T] = None
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


LoadResult = Union[InfoFile[T], NotApplicable]


def make_error(message: str, *, uuid: str | None = None) -> InfoFile:
    return InfoFile(uuid=uuid, errors=[message])


def make_warning(message: str) -> InfoFile:
    return InfoFile(warnings=[message])


def add_error(info: InfoFile, message: str) -> None:
    info.errors.append(message)


def add_warning(info: InfoFile, message: str) -> None:
    info.warnings.append(message)


def has_errors(info: InfoFile) -> bool:
    return len(info.errors) > 0


def has_warnings(info: InfoFile) -> bool:
    return len(info.warnings) > 0


def has_uuid(info: InfoFile) -> bool:
    return bool(info.uuid)


def stringify_errors(info: InfoFile) -> str:
    return "\n".join(info.errors)


def stringify_warnings(info: InfoFile) -> str:
    return "\n".join(info.warnings)


__all__ = [
    "InfoFile",
    "LoadResult",
    "NotApplicable",
    "add_error",
    "add_warning",
    "has_errors",
    "has_uuid",
    "has_warnings",
    "make_error",
    "make_warning",
    "stringify_errors",
    "stringify_warnings",
]
