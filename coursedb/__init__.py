"""
Course content loader.

Scans a course directory of JSON info files and builds an in-memory course
model with per-file errors and warnings.
"""

from importlib import metadata


def get_version() -> str:
    """Return the installed project version."""
    try:
        return metadata.version("coursedb")
    except metadata.PackageNotFoundError:
        return "0.0.0"


__all__ = ["get_version"]
