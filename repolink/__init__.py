"""Resolve repository metadata for documentation source links."""

from .config import ConfigError, RepoLinkConfig, load_config
from .context import FileSet, OverrideError, ResolutionContext, build_context, node_location, resolve_location
from .links import LinkStyle, code_href
from .models import Position, RepoInfo, RepoOverrides, SourceLocation, SourcePosition

__all__ = [
    "ConfigError",
    "FileSet",
    "LinkStyle",
    "OverrideError",
    "Position",
    "RepoInfo",
    "RepoLinkConfig",
    "RepoOverrides",
    "ResolutionContext",
    "SourceLocation",
    "SourcePosition",
    "build_context",
    "code_href",
    "load_config",
    "node_location",
    "resolve_location",
]
