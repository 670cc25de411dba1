"""
Git integration for omz-upgrade.

Every interaction with the repository goes through the git CLI via the
helpers in this module, so error handling and logging stay in one place.
Functions accept an optional cwd; when omitted, git runs in the current
directory.
"""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .errors import GitError, PullError

LOG = logging.getLogger(__name__)


@dataclass
class Remote:
    """
    A configured remote as reported by `git remote -v` (fetch URL).
    """

    name: str
    url: str


def _run_git(
    args: list[str],
    cwd: Optional[str] = None,
    ok_returncodes: Sequence[int] = (0,),
) -> subprocess.CompletedProcess[str]:
    """
    Run a git command and return the completed process.

    A return code outside ok_returncodes raises GitError with git's
    stderr attached.
    """

    cmd = ["git", *args]
    LOG.debug("Running git command: %s", " ".join(cmd))
    try:
        completed = subprocess.run(
            cmd,
            cwd=cwd,
            check=False,
            text=True,
            capture_output=True,
        )
    except OSError as exc:  # noqa: BLE001
        raise GitError(f"failed to execute git: {exc}") from exc

    if completed.returncode not in ok_returncodes:
        stderr = (completed.stderr or "").strip()
        LOG.debug("git stderr: %s", stderr)
        message = f"git command failed: {' '.join(cmd)}"
        if stderr:
            message = f"{message}: {stderr}"
        raise GitError(message)

    return completed


def list_remotes(cwd: Optional[str] = None) -> List[Remote]:
    """
    Return the configured remotes in the order git lists them.
    """

    output = _run_git(["remote", "-v"], cwd=cwd).stdout
    remotes: List[Remote] = []
    seen: Dict[str, Remote] = {}
    for line in output.splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        name, url = parts[0], parts[1]
        kind = parts[2].strip("()") if len(parts) > 2 else "fetch"
        if name in seen or kind != "fetch":
            continue
        remote = Remote(name=name, url=url)
        seen[name] = remote
        remotes.append(remote)
    return remotes


def set_remote_url(name: str, url: str, cwd: Optional[str] = None) -> None:
    _run_git(["remote", "set-url", name, url], cwd=cwd)


def get_config(
    key: str,
    cwd: Optional[str] = None,
    local: bool = False,
    as_bool: bool = False,
) -> Optional[str]:
    """
    Return the value of a config key, or None when it is unset.

    git exits with status 1 for a missing key; that is not an error here.
    """

    args = ["config"]
    if local:
        args.append("--local")
    if as_bool:
        args.append("--bool")
    args.extend(["--get", key])

    completed = _run_git(args, cwd=cwd, ok_returncodes=(0, 1))
    if completed.returncode == 1:
        return None
    return completed.stdout.strip()


def set_config(key: str, value: str, cwd: Optional[str] = None) -> None:
    _run_git(["config", key, value], cwd=cwd)


def unset_config(key: str, cwd: Optional[str] = None) -> None:
    """
    Remove a config key from the local repository config.

    Removing a key that is already absent (exit status 5) is a no-op.
    """

    _run_git(["config", "--unset", key], cwd=cwd, ok_returncodes=(0, 5))


def symbolic_ref(cwd: Optional[str] = None) -> Optional[str]:
    """
    Return the short branch name HEAD points to, or None when detached.
    """

    completed = _run_git(
        ["symbolic-ref", "--quiet", "--short", "HEAD"],
        cwd=cwd,
        ok_returncodes=(0, 1),
    )
    if completed.returncode != 0:
        return None
    return completed.stdout.strip() or None


def rev_parse(ref: str, cwd: Optional[str] = None) -> str:
    return _run_git(["rev-parse", ref], cwd=cwd).stdout.strip()


def checkout(ref: str, cwd: Optional[str] = None) -> None:
    """
    Quietly check out the given ref.
    """

    _run_git(["checkout", "-q", ref, "--"], cwd=cwd)


def pull_rebase(remote: str, branch: str, cwd: Optional[str] = None) -> None:
    """
    Pull branch from remote with --rebase.

    Output is not captured so git's own progress and error messages reach
    the user. LANG is cleared so git does not localize its output. Raises
    PullError carrying git's exit status on failure.
    """

    cmd = ["git", "pull", "--quiet", "--rebase", remote, branch]
    env = dict(os.environ)
    env["LANG"] = ""
    LOG.debug("Running git command: %s", " ".join(cmd))
    try:
        completed = subprocess.run(cmd, cwd=cwd, env=env, check=False)
    except OSError as exc:  # noqa: BLE001
        raise GitError(f"failed to execute git: {exc}") from exc

    if completed.returncode != 0:
        raise PullError(
            f"git pull from {remote}/{branch} failed with exit status {completed.returncode}",
            returncode=completed.returncode,
        )
