"""Read-only access to a local git repository through the git CLI."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Tuple

Runner = Callable[..., str]


class GitError(RuntimeError):
    """Raised when git cannot be run or returns unexpected output."""


class RepositoryNotFoundError(GitError):
    """Raised when no repository encloses the requested directory."""


@dataclass(frozen=True)
class Remote:
    """A configured remote and its connection URLs in configuration order."""

    name: str
    urls: Tuple[str, ...] = field(default_factory=tuple)


class GitRepository:
    """Handle on a git working tree discovered from a path inside it."""

    def __init__(self, worktree_root: str, runner: Runner | None = None) -> None:
        self.worktree_root = worktree_root
        self._runner = runner or self._default_runner

    @classmethod
    def discover(cls, path: str | Path, runner: Runner | None = None) -> "GitRepository":
        """Open the repository containing ``path``, searching parent directories."""
        run = runner or cls._default_runner
        cwd = Path(path)
        try:
            output = run(["git", "rev-parse", "--show-toplevel"], cwd=cwd, capture_output=True)
        except subprocess.CalledProcessError as exc:
            raise RepositoryNotFoundError(f"{path} is not inside a git repository") from exc
        except OSError as exc:
            raise GitError(f"unable to run git: {exc}") from exc

        root = output.strip()
        if not root:
            # Inside .git or a bare repository: no working tree to link against.
            raise RepositoryNotFoundError(f"{path} has no git working tree")
        return cls(os.path.normpath(root), runner=runner)

    def remotes(self) -> List[Remote]:
        """Return the repository's own remotes in the order they appear in its config.

        Remotes defined in global or system configuration are ignored.
        """
        try:
            output = self._run(
                ["git", "config", "--local", "--get-regexp", r"^remote\..*\.url$"],
                capture_output=True,
            )
        except subprocess.CalledProcessError as exc:
            # git config exits with 1 when no key matches.
            if exc.returncode == 1:
                return []
            raise GitError(f"listing remotes failed: {exc}") from exc
        except OSError as exc:
            raise GitError(f"unable to run git: {exc}") from exc

        urls: Dict[str, List[str]] = {}
        for line in output.splitlines():
            key, _, value = line.strip().partition(" ")
            if not key.startswith("remote.") or not key.endswith(".url"):
                continue
            name = key[len("remote.") : -len(".url")]
            urls.setdefault(name, [])
            if value.strip():
                urls[name].append(value.strip())
        return [Remote(name=name, urls=tuple(values)) for name, values in urls.items()]

    def references(self, namespace: str = "refs/") -> Iterator[Tuple[str, str]]:
        """Yield ``(refname, symbolic target)`` pairs under ``namespace``.

        The target is empty for references that point directly at an object.
        Close the generator when stopping early.
        """
        try:
            output = self._run(
                ["git", "for-each-ref", "--format=%(refname) %(symref)", namespace],
                capture_output=True,
            )
        except (subprocess.CalledProcessError, OSError) as exc:
            raise GitError(f"listing references failed: {exc}") from exc
        return _iter_references(output.splitlines())

    def _run(self, args: Iterable[str], *, capture_output: bool = False) -> str:
        return self._runner(args, cwd=Path(self.worktree_root), capture_output=capture_output)

    @staticmethod
    def _default_runner(
        args: Iterable[str],
        *,
        cwd: Path,
        capture_output: bool = False,
    ) -> str:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            check=True,
            text=True,
            capture_output=capture_output,
        )
        return completed.stdout if capture_output else ""


def _iter_references(lines: Iterable[str]) -> Iterator[Tuple[str, str]]:
    for line in lines:
        stripped = line.strip()
        if not stripped:
            continue
        name, _, target = stripped.partition(" ")
        yield name, target.strip()


__all__ = ["GitError", "GitRepository", "Remote", "RepositoryNotFoundError", "Runner"]
