"""Choose the remote and default branch that source links should point at."""

from __future__ import annotations

import logging
from contextlib import closing
from typing import Optional, Sequence

from ..models import RepoOverrides
from .remote import normalize_remote
from .repository import GitError, GitRepository, Remote

ORIGIN = "origin"


class NoRemotesError(GitError):
    """Raised when no configured remote yields usable link information."""


def select_remote(
    log: logging.Logger,
    repository: GitRepository,
    remotes: Sequence[Remote],
    overrides: RepoOverrides,
) -> RepoOverrides:
    """Fill in remote URL and default branch from the repository's remotes.

    A remote named ``origin`` is preferred. If none qualifies, the first
    configured remote is tried instead, whatever its name. Fields already set
    in ``overrides`` are kept as-is; the input object is never modified.
    """
    for remote in remotes:
        if remote.name != ORIGIN:
            log.debug("skipping remote %s because it is not the origin", remote.name)
            continue
        resolved = _process_remote(log, repository, remote, overrides)
        if resolved is not None:
            return resolved

    if not remotes:
        raise NoRemotesError("no remotes found for repository")

    log.debug("no usable origin remote; falling back to first remote %s", remotes[0].name)
    resolved = _process_remote(log, repository, remotes[0], overrides)
    if resolved is None:
        raise NoRemotesError("no usable remotes found for repository")
    return resolved


def _process_remote(
    log: logging.Logger,
    repository: GitRepository,
    remote: Remote,
    overrides: RepoOverrides,
) -> Optional[RepoOverrides]:
    if not remote.urls:
        log.debug("skipping remote %s because it has no URLs", remote.name)
        return None

    url = remote.urls[0]
    candidate = overrides.copy()

    if not candidate.default_branch:
        try:
            branch = _default_branch(repository, remote.name)
        except GitError as exc:
            log.debug("skipping remote %s because listing its refs failed: %s", url, exc)
            return None
        if branch is None:
            log.debug("skipping remote %s because no default branch was found", url)
            return None
        log.debug("found default branch %s for remote %s", branch, url)
        candidate.default_branch = branch

    if candidate.remote:
        return candidate

    normalized = normalize_remote(url)
    if normalized is None:
        log.debug("skipping remote %s because its remote URL could not be normalized", url)
        return None

    candidate.remote = normalized
    return candidate


def _default_branch(repository: GitRepository, remote_name: str) -> Optional[str]:
    prefix = f"refs/remotes/{remote_name}/"
    head_ref = f"{prefix}HEAD"
    with closing(repository.references(prefix)) as refs:
        for name, target in refs:
            if name == head_ref and target.startswith(prefix):
                return target[len(prefix) :]
    return None


__all__ = ["NoRemotesError", "ORIGIN", "select_remote"]
