"""Build errors.

Every error aborts the build. Messages name the offending path (or layout)
and the expectation that was violated.
"""

from __future__ import annotations

from pathlib import Path


class FolioError(Exception):
    """Base class for all build failures."""


class MalformedContentError(FolioError):
    """Front-matter block is missing, unterminated, or unparseable."""

    def __init__(self, reason: str, source: Path | str | None = None) -> None:
        self.reason = reason
        self.source = source
        where = f"{source}: " if source is not None else ""
        super().__init__(f"{where}{reason}")


class ContentLoadError(FolioError):
    """A content directory or data file could not be read."""

    def __init__(self, reason: str, path: Path | str | None = None) -> None:
        self.reason = reason
        self.path = path
        where = f"{path}: " if path is not None else ""
        super().__init__(f"{where}{reason}")


class LayoutNotFoundError(FolioError):
    """A referenced page shell does not exist."""

    def __init__(
        self,
        layout: str,
        searched: list[str] | None = None,
        source: Path | str | None = None,
    ) -> None:
        self.layout = layout
        self.searched = searched or []
        self.source = source
        msg = f"Layout not found: {layout!r}"
        if source is not None:
            msg = f"{source}: {msg}"
        if self.searched:
            msg += f" (searched: {', '.join(self.searched)})"
        super().__init__(msg)


class ConfigError(FolioError):
    """Configuration values have the wrong shape."""

    def __init__(self, reason: str, source: Path | str | None = None) -> None:
        self.reason = reason
        self.source = source
        where = f"{source}: " if source is not None else ""
        super().__init__(f"{where}invalid configuration ({reason})")
