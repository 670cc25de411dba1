"""
Remote URL handling for omz-upgrade.

Installations cloned from the legacy repository location are moved to
the canonical ohmyzsh/ohmyzsh repository. URLs are parsed into their
parts and compared field by field, so "oh-my-zsh" and "oh-my-zsh.git"
match while look-alike paths do not.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

from .git_adapter import list_remotes, set_remote_url

LOG = logging.getLogger(__name__)

GITHUB_HOST = "github.com"

LEGACY_ORG = "snakewarhead"
LEGACY_REPO = "oh-my-zsh"

CANONICAL_ORG = "ohmyzsh"
CANONICAL_REPO = "ohmyzsh"

HTTPS_PATTERN = re.compile(
    r"^https://(?P<host>[^/]+)/(?P<org>[^/]+)/(?P<repo>[^/]+?)(?P<suffix>\.git)?$"
)

SSH_PATTERN = re.compile(
    r"^(?:ssh://)?git@(?P<host>[^:/]+)[:/](?P<org>[^/]+)/(?P<repo>[^/]+?)(?P<suffix>\.git)?$"
)

GIT_PATTERN = re.compile(
    r"^git://(?P<host>[^/]+)/(?P<org>[^/]+)/(?P<repo>[^/]+?)(?P<suffix>\.git)?$"
)

_PATTERNS = (("https", HTTPS_PATTERN), ("ssh", SSH_PATTERN), ("git", GIT_PATTERN))


@dataclass(frozen=True)
class RemoteUrl:
    """
    A remote URL split into its parts.

    scheme is one of "https", "ssh" or "git"; suffix is ".git" or "".
    """

    scheme: str
    host: str
    org: str
    repo: str
    suffix: str = ""


def parse_remote_url(url: str) -> Optional[RemoteUrl]:
    """
    Parse a hosted repository URL, returning None for anything else.
    """

    for scheme, pattern in _PATTERNS:
        match = pattern.match(url)
        if match:
            return RemoteUrl(
                scheme=scheme,
                host=match.group("host"),
                org=match.group("org"),
                repo=match.group("repo"),
                suffix=match.group("suffix") or "",
            )
    return None


def is_legacy_remote(parsed: RemoteUrl) -> bool:
    return (
        parsed.host == GITHUB_HOST
        and parsed.org == LEGACY_ORG
        and parsed.repo == LEGACY_REPO
    )


def canonical_url(parsed: RemoteUrl) -> str:
    """
    Return the canonical repository URL for the transport in use.

    SSH remotes keep SSH; https and the unauthenticated git:// protocol
    both move to https.
    """

    if parsed.scheme == "ssh":
        return f"git@{GITHUB_HOST}:{CANONICAL_ORG}/{CANONICAL_REPO}.git"
    return f"https://{GITHUB_HOST}/{CANONICAL_ORG}/{CANONICAL_REPO}.git"


def normalize_remote(cwd: Optional[str] = None) -> Optional[str]:
    """
    Point the first remote that uses the legacy location at the canonical
    repository.

    Returns the name of the rewritten remote, or None if none matched.
    """

    for remote in list_remotes(cwd=cwd):
        parsed = parse_remote_url(remote.url)
        if parsed is None or not is_legacy_remote(parsed):
            continue

        new_url = canonical_url(parsed)
        LOG.info("Moving remote %s from %s to %s", remote.name, remote.url, new_url)
        set_remote_url(remote.name, new_url, cwd=cwd)
        return remote.name

    return None
