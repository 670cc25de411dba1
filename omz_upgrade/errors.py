"""
Custom exception types used across omz-upgrade.

The orchestrator relies on these classes to tell a fatal failure before
the update (nothing to roll back) from a failed pull (roll back, then
report git's exit code).
"""

from __future__ import annotations


class OmzUpgradeError(Exception):
    """Base class for all omz-upgrade specific errors."""


class GitError(OmzUpgradeError):
    """Raised when git operations fail."""


class CheckoutError(GitError):
    """Raised when the working tree cannot be switched to a ref."""


class GitStateError(GitError):
    """Raised when the current HEAD cannot be determined."""


class PullError(GitError):
    """
    Raised when the rebase-based pull exits non-zero.

    returncode is git's own exit status and becomes the process exit code.
    """

    def __init__(self, message: str, returncode: int) -> None:
        super().__init__(message)
        self.returncode = returncode
