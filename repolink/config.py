"""Configuration loading for repolink (.repolink.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .links import LinkStyle
from .models import RepoOverrides

CONFIG_FILENAME = ".repolink.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class RepoLinkConfig:
    """Represents the settings defined in .repolink.yml."""

    root: Path
    repository: RepoOverrides = field(default_factory=RepoOverrides)
    link_style: Optional[LinkStyle] = None


def load_config(config_path: Path) -> RepoLinkConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return RepoLinkConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    repo_data = _as_dict(data.get("repository"))
    repository = RepoOverrides(
        remote=_as_str(repo_data.get("url")),
        default_branch=_as_str(repo_data.get("default_branch")),
        path_from_root=_as_str(repo_data.get("path")),
    )

    link_style = None
    style_value = _as_str(data.get("link_style"))
    if style_value:
        try:
            link_style = LinkStyle(style_value)
        except ValueError as exc:
            choices = ", ".join(style.value for style in LinkStyle)
            raise ConfigError(f"Unknown link_style {style_value!r}; expected one of {choices}") from exc

    return RepoLinkConfig(root=root, repository=repository, link_style=link_style)


def merge_overrides(base: RepoOverrides, **values: Optional[str]) -> RepoOverrides:
    """Return ``base`` with every non-empty keyword value replacing its field."""
    merged = base.copy()
    for name, value in values.items():
        if value:
            setattr(merged, name, value)
    return merged


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None
