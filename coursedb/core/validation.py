"""Validation results and the error types raised by the course loader."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, List, Optional


@dataclass
class ValidationResult:
    """Outcome of a schema or semantic check."""

    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0


class CourseLoadError(RuntimeError):
    """Raised by all-or-nothing callers once a scan found any error."""


class InfoFileConsistencyError(RuntimeError):
    """The diagnostic JSON parser accepted a file the strict parser rejected.

    This points at a bug in the loader rather than in course content, so it
    aborts the scan instead of being recorded against the file.
    """


def _find_fault(group: BaseExceptionGroup) -> Optional[InfoFileConsistencyError]:
    for exc in group.exceptions:
        if isinstance(exc, InfoFileConsistencyError):
            return exc
        if isinstance(exc, BaseExceptionGroup):
            found = _find_fault(exc)
            if found is not None:
                return found
    return None


@contextmanager
def unwrap_consistency_fault() -> Iterator[None]:
    """Let an ``InfoFileConsistencyError`` escape task groups as itself.

    Searches nested exception groups; any other group is re-raised unchanged.
    """
    try:
        yield
    except BaseExceptionGroup as group:
        fault = _find_fault(group)
        if fault is None:
            raise
        raise fault from None


__all__ = [
    "CourseLoadError",
    "InfoFileConsistencyError",
    "ValidationResult",
    "unwrap_consistency_fault",
]
