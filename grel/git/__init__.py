"""Git operations used by the release engine.

Usage:
    from grel.git import Repository

    repo = Repository(Path("."))
    repo.fetch_tags("origin")
    names = repo.tag_names()
"""

from grel.git.credentials import (
    Credential,
    CredentialProvider,
    ambient_credentials,
    static_credentials,
)
from grel.git.repository import (
    GitError,
    LogEntry,
    Repository,
)

__all__ = [
    # Repository
    "GitError",
    "LogEntry",
    "Repository",
    # Credentials
    "Credential",
    "CredentialProvider",
    "ambient_credentials",
    "static_credentials",
]
