"""Per-run resolution context threaded through documentation generation."""

from __future__ import annotations

import ast
import logging
import os
import stat
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, List, Optional

from .git.locator import locate_repository
from .git.repository import Runner
from .logging import get_logger
from .models import Position, RepoInfo, RepoOverrides, SourceLocation, SourcePosition


class OverrideError(ValueError):
    """Raised when manual repository overrides are malformed."""


class FileSet:
    """Index of parsed source files, mapping AST nodes back to their file.

    A single instance is shared by a context and every context derived from it.
    """

    def __init__(self) -> None:
        self._modules: Dict[str, ast.Module] = {}
        self._owners: Dict[int, str] = {}

    def parse(self, path: str | Path) -> ast.Module:
        """Parse ``path`` once and remember which file each node belongs to."""
        filename = os.path.abspath(path)
        cached = self._modules.get(filename)
        if cached is not None:
            return cached

        source = Path(filename).read_text(encoding="utf-8")
        module = ast.parse(source, filename=filename)
        self._modules[filename] = module
        for node in ast.walk(module):
            self._owners[id(node)] = filename
        return module

    def files(self) -> List[str]:
        return list(self._modules)

    def position(self, node: ast.AST) -> SourcePosition:
        """Return the 1-based span of ``node``.

        Python reports 0-based columns; the end column is the one just past the
        node, matching the start convention.
        """
        filename = self._owners.get(id(node))
        if filename is None:
            raise ValueError(f"{type(node).__name__} node was not parsed by this file set")
        lineno = getattr(node, "lineno", None)
        if lineno is None:
            raise ValueError(f"{type(node).__name__} node has no source position")
        col = getattr(node, "col_offset", 0)
        end_lineno = getattr(node, "end_lineno", None) or lineno
        end_col = getattr(node, "end_col_offset", None)
        if end_col is None:
            end_col = col
        return SourcePosition(
            filename=filename,
            start=Position(lineno, col + 1),
            end=Position(end_lineno, end_col + 1),
        )


@dataclass(frozen=True)
class ResolutionContext:
    """Configuration for documenting one package within a run."""

    work_dir: str
    pkg_dir: str
    level: int = 1
    repository: Optional[RepoInfo] = None
    file_set: FileSet = field(default_factory=FileSet, compare=False, repr=False)
    log: logging.Logger = field(
        default_factory=lambda: get_logger("context"), compare=False, repr=False
    )

    def derive_nested(self, step: int, pkg_dir: str | Path | None = None) -> "ResolutionContext":
        """Return a copy one nesting step deeper.

        The repository, file set and logger are shared with this context.
        """
        if step < 1:
            raise ValueError(f"nesting step must be positive, got {step}")
        return replace(
            self,
            level=self.level + step,
            pkg_dir=os.path.abspath(pkg_dir) if pkg_dir is not None else self.pkg_dir,
        )


def build_context(
    log: logging.Logger,
    work_dir: str | Path,
    pkg_dir: str | Path,
    *,
    overrides: RepoOverrides | None = None,
    runner: Runner | None = None,
) -> ResolutionContext:
    """Build the context for documenting ``pkg_dir`` from ``work_dir``.

    Raises ``OverrideError`` for a relative ``path_from_root`` override and an
    ``OSError`` when either directory is missing or cannot be read. Failure to
    detect repository information is logged and leaves ``repository`` unset.
    """
    draft = _apply_overrides(overrides)

    abs_pkg_dir = _absolute_dir(pkg_dir)
    abs_work_dir = _absolute_dir(work_dir)

    if draft.is_complete():
        log.debug("skipping repository resolution because all values have manual overrides")
        repository: Optional[RepoInfo] = draft.finalize()
    else:
        repository = locate_repository(log, abs_work_dir, abs_pkg_dir, draft, runner=runner)
        if repository is None:
            log.info("no repository information found for %s; source links are disabled", abs_pkg_dir)

    return ResolutionContext(
        work_dir=abs_work_dir,
        pkg_dir=abs_pkg_dir,
        level=1,
        repository=repository,
        file_set=FileSet(),
        log=log,
    )


def resolve_location(context: ResolutionContext, position: SourcePosition) -> SourceLocation:
    """Attach the context's repository information to a parsed source position."""
    return SourceLocation(
        start=position.start,
        end=position.end,
        filepath=position.filename,
        work_dir=context.work_dir,
        repository=context.repository,
    )


def node_location(context: ResolutionContext, node: ast.AST) -> SourceLocation:
    return resolve_location(context, context.file_set.position(node))


def _apply_overrides(overrides: RepoOverrides | None) -> RepoOverrides:
    draft = overrides.copy() if overrides is not None else RepoOverrides()
    if draft.path_from_root:
        # Accept forward slashes on every platform.
        converted = draft.path_from_root.replace("/", os.sep)
        if not converted.startswith(os.sep):
            raise OverrideError(
                f"provided repository path {draft.path_from_root} must be absolute"
            )
        draft.path_from_root = converted
    return draft


def _absolute_dir(path: str | Path) -> str:
    absolute = os.path.abspath(path)
    mode = os.stat(absolute).st_mode
    if not stat.S_ISDIR(mode):
        raise NotADirectoryError(f"{absolute} is not a directory")
    return absolute


__all__ = [
    "FileSet",
    "OverrideError",
    "ResolutionContext",
    "build_context",
    "node_location",
    "resolve_location",
]
