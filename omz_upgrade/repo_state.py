"""
Repository state management for omz-upgrade.

Reads the persisted settings, applies the permanent config fixups, and
captures and restores the parts of the repository state an update
touches: the checked-out HEAD and the rebase.autoStash setting.
"""

from __future__ import annotations

import logging
from typing import Optional

from .config import SETTINGS_NAMESPACE
from .errors import CheckoutError, GitError, GitStateError
from .git_adapter import get_config, set_config, symbolic_ref, unset_config
from .git_adapter import checkout as git_checkout
from .git_adapter import rev_parse as git_rev_parse
from .remotes import normalize_remote

LOG = logging.getLogger(__name__)

AUTO_STASH_KEY = "rebase.autoStash"

# Config values known to prevent git errors in Oh My Zsh checkouts. They
# are permanent and are not rolled back at the end of a run.
FIXUPS = (
    # Line endings (ohmyzsh#4069)
    ("core.eol", "lf"),
    ("core.autocrlf", "false"),
    # zeroPaddedFilemode fsck errors (ohmyzsh#4963)
    ("fsck.zeroPaddedFilemode", "ignore"),
    ("fetch.fsck.zeroPaddedFilemode", "ignore"),
    ("receive.fsck.zeroPaddedFilemode", "ignore"),
)

__all__ = [
    "AUTO_STASH_KEY",
    "FIXUPS",
    "apply_fixups",
    "capture_auto_stash",
    "capture_head",
    "checkout",
    "enable_auto_stash",
    "get_setting",
    "normalize_remote",
    "restore_auto_stash",
    "rev_parse",
    "set_setting",
]


def apply_fixups(cwd: Optional[str] = None) -> None:
    for key, value in FIXUPS:
        set_config(key, value, cwd=cwd)


def capture_auto_stash(cwd: Optional[str] = None) -> Optional[str]:
    """
    Return the repository's own rebase.autoStash value, or None if unset.

    Only the local scope is read, so restoring the value never copies a
    global setting into the repository.
    """

    return get_config(AUTO_STASH_KEY, cwd=cwd, local=True, as_bool=True)


def enable_auto_stash(cwd: Optional[str] = None) -> None:
    set_config(AUTO_STASH_KEY, "true", cwd=cwd)


def restore_auto_stash(prior: Optional[str], cwd: Optional[str] = None) -> None:
    """
    Put rebase.autoStash back the way capture_auto_stash() found it.
    """

    if not prior:
        unset_config(AUTO_STASH_KEY, cwd=cwd)
    else:
        set_config(AUTO_STASH_KEY, prior, cwd=cwd)


def get_setting(key: str, default: str, cwd: Optional[str] = None) -> str:
    """
    Read oh-my-zsh.<key> from the local repository config.
    """

    value = get_config(f"{SETTINGS_NAMESPACE}.{key}", cwd=cwd, local=True)
    return value or default


def set_setting(key: str, value: str, cwd: Optional[str] = None) -> None:
    set_config(f"{SETTINGS_NAMESPACE}.{key}", value, cwd=cwd)


def capture_head(cwd: Optional[str] = None) -> str:
    """
    Return the branch HEAD is attached to, or the commit id if detached.
    """

    try:
        branch = symbolic_ref(cwd=cwd)
        if branch:
            return branch
        return git_rev_parse("HEAD", cwd=cwd)
    except GitError as exc:
        raise GitStateError(f"cannot determine the current HEAD: {exc}") from exc


def checkout(ref: str, cwd: Optional[str] = None) -> None:
    try:
        git_checkout(ref, cwd=cwd)
    except GitError as exc:
        raise CheckoutError(f"cannot check out {ref}: {exc}") from exc


def rev_parse(ref: str, cwd: Optional[str] = None) -> str:
    return git_rev_parse(ref, cwd=cwd)
