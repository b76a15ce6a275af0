"""Core data models shared across repolink components."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class RepoInfo:
    """Resolved repository information used to build source links."""

    remote: str
    default_branch: str
    path_from_root: str


@dataclass
class RepoOverrides:
    """Partially known repository information, filled in during resolution.

    Any subset of the fields may be set by the caller. Detection only fills the
    fields that are still empty, so explicit values always win.
    """

    remote: Optional[str] = None
    default_branch: Optional[str] = None
    path_from_root: Optional[str] = None

    def is_complete(self) -> bool:
        return bool(self.remote and self.default_branch and self.path_from_root)

    def copy(self) -> "RepoOverrides":
        return replace(self)

    def finalize(self) -> RepoInfo:
        """Return an immutable ``RepoInfo``; every field must be populated."""
        if not self.is_complete():
            missing = [
                name
                for name in ("remote", "default_branch", "path_from_root")
                if not getattr(self, name)
            ]
            raise ValueError(f"Repository information is incomplete: missing {', '.join(missing)}")
        return RepoInfo(
            remote=str(self.remote),
            default_branch=str(self.default_branch),
            path_from_root=str(self.path_from_root),
        )


@dataclass(frozen=True)
class Position:
    """1-based line and column within a file."""

    line: int
    col: int


@dataclass(frozen=True)
class SourcePosition:
    """Span of a parsed construct as reported by the parser layer."""

    filename: str
    start: Position
    end: Position


@dataclass(frozen=True)
class SourceLocation:
    """Position within a file and, if known, the repository holding it."""

    start: Position
    end: Position
    filepath: str
    work_dir: str
    repository: Optional[RepoInfo] = None
