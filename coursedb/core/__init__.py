"""
Foundational result types, errors, and configuration for the course loader.

Nothing here touches the filesystem layout of a course; the loaders in
``coursedb.sync`` build on these pieces.
"""

from .config import SyncConfig, load_sync_config, resolve_sync_config
from .infofile import InfoFile, LoadResult, NotApplicable
from .validation import CourseLoadError, InfoFileConsistencyError, ValidationResult

__all__ = [
    "CourseLoadError",
    "InfoFile",
    "InfoFileConsistencyError",
    "LoadResult",
    "NotApplicable",
    "SyncConfig",
    "ValidationResult",
    "load_sync_config",
    "resolve_sync_config",
]
