"""
Compose domain models for monako.

This module contains the data classes and enums describing files found in
an origin, the whitelist used to select them and the outcome of composing
an origin into the content tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import List, Optional

from .config import Origin


class ContentFormat(Enum):
    """Markup formats that receive postprocessing."""

    MARKDOWN = "markdown"
    ASCIIDOC = "asciidoc"
    OTHER = "other"

    @classmethod
    def from_filename(cls, filename: str) -> "ContentFormat":
        name = PurePosixPath(filename).name.lower()
        if name.endswith(".md"):
            return cls.MARKDOWN
        if name.endswith((".adoc", ".asciidoc", ".asc")):
            return cls.ASCIIDOC
        return cls.OTHER


class ComposeStatus(Enum):
    """Status of composing a single origin."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class FilterCriteria:
    """Suffix whitelist for files of an origin."""

    whitelist: List[str] = field(default_factory=list)

    def matches_path(self, path: str) -> bool:
        """Check if the file name of a path ends with a whitelisted suffix."""

        name = PurePosixPath(path).name.lower()
        return any(name.endswith(suffix.lower()) for suffix in self.whitelist if suffix)


@dataclass
class OriginFile:
    """A whitelisted file of an origin and the place it is composed to."""

    remote_path: str
    local_path: Path
    origin: Origin = field(repr=False)

    @property
    def format(self) -> ContentFormat:
        return ContentFormat.from_filename(self.remote_path)


@dataclass
class ComposeResult:
    """Outcome of composing one origin."""

    origin: Origin
    status: ComposeStatus = ComposeStatus.PENDING
    composed_files: List[Path] = field(default_factory=list)

    started_at: datetime = field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None
    error_message: Optional[str] = None

    @property
    def is_successful(self) -> bool:
        return self.status == ComposeStatus.COMPLETED

    @property
    def duration_seconds(self) -> float:
        if self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return 0.0

    def mark_completed(self) -> None:
        self.completed_at = datetime.now()
        self.status = ComposeStatus.FAILED if self.error_message else ComposeStatus.COMPLETED


__all__ = [
    "ContentFormat",
    "ComposeStatus",
    "FilterCriteria",
    "OriginFile",
    "ComposeResult",
]
