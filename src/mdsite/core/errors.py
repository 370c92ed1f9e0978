"""Build error taxonomy: fatal source errors and per-file read/write failures"""

from pathlib import Path


class BuildError(Exception):
    """Base class for site build errors."""


class SourceNotFoundError(BuildError):
    """Source is neither a directory nor a markdown file; aborts the whole run."""

    def __init__(self, path: Path):
        super().__init__(f"Source not found: {path} (expected a directory or markdown file)")
        self.path = path


class FileError(BuildError):
    """A per-file I/O failure wrapping the underlying OSError."""

    action = "access"

    def __init__(self, path: Path, cause: OSError):
        super().__init__(f"Cannot {self.action} {path}: {cause.strerror or cause}")
        self.path = path
        self.cause = cause


class UnreadableSourceError(FileError):
    action = "read"


class UnwritableDestinationError(FileError):
    action = "write"


class TemplateError(ValueError):
    """Template file is unreadable or lacks exactly one content marker."""
