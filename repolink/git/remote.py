"""Normalisation of git remote URLs into browsable HTTPS addresses."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence

_SSH_REMOTE = re.compile(r"^[\w-]+@([^:]+):(.+?)(?:\.git)?$")
_HTTPS_REMOTE = re.compile(r"^(https?://)(?:[^@/]+@)?([\w.-]+)(/.+?)?(?:\.git)?$")

_DEVOPS_SSH_V3_PATH = re.compile(r"^v3/([^/]+)/([^/]+)/([^/]+)$")
_DEVOPS_HTTPS_PATH = re.compile(r"^/([^/]+)/([^/]+)/_git/([^/]+)$")

_DEVOPS_SSH_HOSTS = frozenset({"ssh.dev.azure.com", "vs-ssh.visualstudio.com"})


@dataclass(frozen=True)
class RemoteShape:
    """A connection-string dialect, split into scheme, host and path."""

    name: str
    pattern: re.Pattern[str]
    scheme_group: Optional[int]
    host_group: int
    path_group: int

    def match(self, remote: str) -> Optional["RemoteParts"]:
        found = self.pattern.match(remote)
        if found is None:
            return None
        scheme = found.group(self.scheme_group) if self.scheme_group else "https://"
        return RemoteParts(
            scheme=scheme,
            host=found.group(self.host_group),
            path=found.group(self.path_group) or "",
        )


@dataclass(frozen=True)
class RemoteParts:
    scheme: str
    host: str
    path: str


@dataclass(frozen=True)
class RemoteRule:
    """One row of the normalisation table.

    ``path_pattern`` of ``None`` accepts any path. When a rule's shape and host
    match but its path does not, normalisation fails outright.
    """

    shape: RemoteShape
    host_matches: Callable[[str], bool]
    path_pattern: Optional[re.Pattern[str]]
    rewrite: Callable[[RemoteParts, Optional[re.Match[str]]], str]


SSH_SHORTHAND = RemoteShape("ssh", _SSH_REMOTE, scheme_group=None, host_group=1, path_group=2)
HTTPS = RemoteShape("https", _HTTPS_REMOTE, scheme_group=1, host_group=2, path_group=3)


def _devops_url(org: str, project: str, repo: str) -> str:
    return f"https://dev.azure.com/{org}/{project}/_git/{repo}"


REMOTE_RULES: Sequence[RemoteRule] = (
    # Azure DevOps v3 SSH
    RemoteRule(
        shape=SSH_SHORTHAND,
        host_matches=lambda host: host in _DEVOPS_SSH_HOSTS,
        path_pattern=_DEVOPS_SSH_V3_PATH,
        rewrite=lambda parts, m: _devops_url(m.group(1), m.group(2), m.group(3)),
    ),
    # GitHub and friends
    RemoteRule(
        shape=SSH_SHORTHAND,
        host_matches=lambda host: True,
        path_pattern=None,
        rewrite=lambda parts, m: f"https://{parts.host}/{parts.path}",
    ),
    # Azure DevOps
    RemoteRule(
        shape=HTTPS,
        host_matches=lambda host: host == "dev.azure.com",
        path_pattern=_DEVOPS_HTTPS_PATH,
        rewrite=lambda parts, m: _devops_url(m.group(1), m.group(2), m.group(3)),
    ),
    # Azure DevOps, legacy per-organisation domain
    RemoteRule(
        shape=HTTPS,
        host_matches=lambda host: host.endswith(".visualstudio.com"),
        path_pattern=_DEVOPS_HTTPS_PATH,
        rewrite=lambda parts, m: _devops_url(parts.host.split(".", 1)[0], m.group(2), m.group(3)),
    ),
    RemoteRule(
        shape=HTTPS,
        host_matches=lambda host: True,
        path_pattern=None,
        rewrite=lambda parts, m: f"{parts.scheme}{parts.host}{parts.path}",
    ),
)


def normalize_remote(remote: str, rules: Sequence[RemoteRule] = REMOTE_RULES) -> Optional[str]:
    """Return the canonical web URL for a git remote, or ``None`` if unrecognised.

    Embedded credentials and a trailing ``.git`` are dropped. Azure DevOps
    remotes in any of their dialects map to
    ``https://dev.azure.com/{org}/{project}/_git/{repo}``.
    """
    remote = remote.strip()
    shapes_seen: Dict[RemoteShape, Optional[RemoteParts]] = {}
    for rule in rules:
        shape = rule.shape
        if shape not in shapes_seen:
            shapes_seen[shape] = shape.match(remote)
        parts = shapes_seen[shape]
        if parts is None or not rule.host_matches(parts.host):
            continue
        if rule.path_pattern is None:
            return rule.rewrite(parts, None)
        path_match = rule.path_pattern.match(parts.path)
        if path_match is None:
            return None
        return rule.rewrite(parts, path_match)
    return None


__all__ = [
    "HTTPS",
    "REMOTE_RULES",
    "RemoteParts",
    "RemoteRule",
    "RemoteShape",
    "SSH_SHORTHAND",
    "normalize_remote",
]
