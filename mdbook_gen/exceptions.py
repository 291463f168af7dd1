"""Package-specific exception types."""

from __future__ import annotations

from pathlib import Path


class BuildError(Exception):
    """Base class for errors raised while building a book.

    Rendering itself never raises; these cover the filesystem and project
    layout around it.
    """


class ChapterReadError(BuildError):
    """Raised when a chapter source cannot be read.

    Args:
        path: Path of the chapter file.
        reason: Human readable cause.
    """

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read chapter {path}: {reason}")


class ProjectExistsError(BuildError):
    """Raised when `init` targets a directory that already exists.

    Args:
        path: The existing directory.
    """

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Directory {path} already exists")
