"""Locate the repository enclosing a documented directory."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from ..models import RepoInfo, RepoOverrides
from .repository import GitError, GitRepository, RepositoryNotFoundError, Runner
from .selector import select_remote


def locate_repository(
    log: logging.Logger,
    work_dir: str | Path,
    target_dir: str | Path,
    overrides: RepoOverrides | None = None,
    *,
    runner: Runner | None = None,
) -> Optional[RepoInfo]:
    """Return repository information for ``target_dir`` or ``None``.

    Detection problems are logged and reported as ``None``; this function does
    not raise for a missing repository, missing remotes or unknown URL formats.
    """
    info = overrides.copy() if overrides is not None else RepoOverrides()
    if info.is_complete():
        log.debug("skipping repository detection because all values have manual overrides")
        return info.finalize()

    try:
        repository = GitRepository.discover(target_dir, runner=runner)
    except RepositoryNotFoundError as exc:
        log.debug("no repository found: %s", exc)
        return None
    except GitError as exc:
        log.info("unable to resolve repository due to error: %s", exc)
        return None

    if not info.path_from_root:
        info.path_from_root = path_from_root(repository.worktree_root, work_dir)

    if info.remote and info.default_branch:
        return info.finalize()

    try:
        resolved = select_remote(log, repository, repository.remotes(), info)
    except GitError as exc:
        log.info("unable to resolve repository due to error: %s", exc)
        return None

    repo = resolved.finalize()
    log.debug(
        "resolved repository with remote %s, default branch %s, path from root %s",
        repo.remote,
        repo.default_branch,
        repo.path_from_root,
    )
    return repo


def path_from_root(worktree_root: str | Path, work_dir: str | Path) -> str:
    """Return ``work_dir`` relative to the working tree, prefixed with the separator."""
    relative = os.path.relpath(os.path.realpath(work_dir), os.path.realpath(worktree_root))
    return os.path.normpath(os.path.join(os.sep, relative))


__all__ = ["locate_repository", "path_from_root"]
