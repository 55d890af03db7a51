"""Credential resolution for fetching from a remote.

A ``CredentialProvider`` is any callable that, given a remote URL, returns a
``Credential`` or None. None means "let git authenticate on its own": the
configured credential helper for HTTP(S) remotes, ssh-agent for ``git@``
remotes. Providers are injected, so tests can pin a fixed value.
"""

from __future__ import annotations

import base64
from collections.abc import Callable
from dataclasses import dataclass

__all__ = [
    "Credential",
    "CredentialProvider",
    "ambient_credentials",
    "git_config_args",
    "static_credentials",
]


@dataclass(frozen=True, slots=True)
class Credential:
    """Username/secret pair for HTTP(S) basic authentication."""

    username: str
    secret: str

    def __repr__(self) -> str:
        return f"Credential(username={self.username!r}, secret='***')"

    def basic_auth_header(self) -> str:
        raw = f"{self.username}:{self.secret}".encode("utf-8")
        return "Authorization: Basic " + base64.b64encode(raw).decode("ascii")


type CredentialProvider = Callable[[str], Credential | None]


def ambient_credentials(url: str) -> Credential | None:
    """Defer to git's credential helper or ssh-agent."""
    del url
    return None


def static_credentials(username: str, secret: str) -> CredentialProvider:
    """Provider that returns the same credential for every HTTP(S) URL."""
    credential = Credential(username=username, secret=secret)

    def provide(url: str) -> Credential | None:
        return credential if _is_http(url) else None

    return provide


def git_config_args(url: str, provider: CredentialProvider) -> list[str]:
    """Build ``-c`` options that carry a provided credential to git.

    Only HTTP(S) remotes can take an explicit credential; ssh remotes always
    go through the agent.
    """
    if not _is_http(url):
        return []
    credential = provider(url)
    if credential is None:
        return []
    return ["-c", f"http.extraHeader={credential.basic_auth_header()}"]


def _is_http(url: str) -> bool:
    return url.startswith(("http://", "https://"))
