"""Git repository inspection for source links."""

from .locator import locate_repository, path_from_root
from .remote import REMOTE_RULES, RemoteRule, normalize_remote
from .repository import GitError, GitRepository, Remote, RepositoryNotFoundError
from .selector import NoRemotesError, select_remote

__all__ = [
    "GitError",
    "GitRepository",
    "NoRemotesError",
    "REMOTE_RULES",
    "Remote",
    "RemoteRule",
    "RepositoryNotFoundError",
    "locate_repository",
    "normalize_remote",
    "path_from_root",
    "select_remote",
]
