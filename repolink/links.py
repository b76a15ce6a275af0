"""Build permalinks to source locations on the hosting provider."""

from __future__ import annotations

import os
from enum import Enum
from typing import Optional
from urllib.parse import quote

from .models import SourceLocation


class LinkStyle(str, Enum):
    GITHUB = "github"
    AZURE_DEVOPS = "azure-devops"


def detect_style(remote: str) -> LinkStyle:
    """Guess the link format from a normalized remote URL."""
    if remote.startswith("https://dev.azure.com/"):
        return LinkStyle.AZURE_DEVOPS
    return LinkStyle.GITHUB


def repository_path(location: SourceLocation) -> Optional[str]:
    """Return the file's path from the repository root, using forward slashes."""
    if location.repository is None:
        return None
    if os.path.isabs(location.filepath):
        relative = os.path.relpath(location.filepath, location.work_dir)
    else:
        relative = location.filepath
    full = os.path.normpath(os.path.join(location.repository.path_from_root, relative))
    return full.replace(os.sep, "/").lstrip("/")


def code_href(location: SourceLocation, style: LinkStyle | str | None = None) -> Optional[str]:
    """Return a permalink for ``location`` or ``None`` without repository info."""
    repo = location.repository
    path = repository_path(location)
    if repo is None or path is None:
        return None

    chosen = LinkStyle(style) if style is not None else detect_style(repo.remote)
    if chosen is LinkStyle.AZURE_DEVOPS:
        return (
            f"{repo.remote}?path={quote('/' + path)}&version=GB{quote(repo.default_branch)}"
            f"&line={location.start.line}&lineEnd={location.end.line}"
            f"&lineStartColumn={location.start.col}&lineEndColumn={location.end.col}"
            "&lineStyle=plain&_a=contents"
        )

    if location.start.line == location.end.line:
        fragment = f"L{location.start.line}"
    else:
        fragment = f"L{location.start.line}-L{location.end.line}"
    return f"{repo.remote}/blob/{repo.default_branch}/{path}#{fragment}"


__all__ = ["LinkStyle", "code_href", "detect_style", "repository_path"]
