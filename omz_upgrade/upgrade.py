"""
High-level orchestration for omz-upgrade.

A run moves through these steps:
  - normalize the legacy remote URL and apply the permanent fixups,
  - capture the auto-stash setting and HEAD, enable auto-stash,
  - check out the update branch and pull it with --rebase,
  - report the outcome, and
  - restore HEAD and the auto-stash setting.

The restore steps run on every path once the update branch is checked
out. If that checkout fails the run aborts early with exit code 1; only
auto-stash is restored then, since HEAD was never moved.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from dataclasses import dataclass
from typing import Optional, TextIO

from .config import DEFAULT_BRANCH, DEFAULT_REMOTE, Config
from .errors import CheckoutError, GitStateError, PullError
from .formatter import Formatter
from .git_adapter import pull_rebase
from .repo_state import (
    apply_fixups,
    capture_auto_stash,
    capture_head,
    checkout,
    enable_auto_stash,
    get_setting,
    normalize_remote,
    restore_auto_stash,
    rev_parse,
    set_setting,
)
from .terminal import Capabilities

LOG = logging.getLogger(__name__)

STATUS_UPDATED = "updated"
STATUS_UP_TO_DATE = "up-to-date"
STATUS_FAILED = "failed"
STATUS_ABORTED = "aborted"

MSG_UPDATING = "Updating Oh My Zsh"
MSG_UP_TO_DATE = "Oh My Zsh is already at the latest version."
MSG_UPDATED = "Hooray! Oh My Zsh has been updated!"
MSG_FAILED = "There was an error updating. Try again later?"

COMMUNITY_LINKS = (
    (
        "To keep up with the latest news and updates, follow us on Twitter:",
        "@ohmyzsh",
        "https://twitter.com/ohmyzsh",
    ),
    (
        "Want to get involved in the community? Join our Discord:",
        "Discord server",
        "https://discord.gg/ohmyzsh",
    ),
    (
        "Get your Oh My Zsh swag at:",
        "Planet Argon Shop",
        "https://shop.planetargon.com/collections/oh-my-zsh",
    ),
)


@dataclass
class UpgradeResult:
    """
    Outcome of a run.

    exit_code is what the process should exit with; last_version is the
    pre-update commit when new commits were pulled.
    """

    status: str
    exit_code: int
    message: str
    last_version: Optional[str] = None


class _Reporter:
    """
    Writes status output for one run.
    """

    def __init__(self, formatter: Formatter, out: TextIO) -> None:
        self.fmt = formatter
        self.out = out

    def line(self, text: str = "") -> None:
        print(text, file=self.out)

    def info(self, text: str) -> None:
        self.line(self.fmt.style(text, self.fmt.palette.info))

    def error(self, text: str) -> None:
        self.line(self.fmt.style(text, self.fmt.palette.error))

    def changelog_hint(self) -> None:
        p = self.fmt.palette
        self.line(
            f"{p.info}You can see the changelog with "
            f"`{p.bold}omz changelog{p.reset}{p.info}`{p.reset}"
        )

    def success(self, message: str) -> None:
        for row in self.fmt.banner():
            self.line(row)
        self.line()
        self.info(message)
        self.line()
        p = self.fmt.palette
        for caption, text, url in COMMUNITY_LINKS:
            self.line(self.fmt.style(f"{caption} {self.fmt.link(text, url)}", p.info, p.bold))


def show_changelog(config: Config, since: str) -> None:
    """
    Run the changelog renderer for HEAD against the pre-update commit.

    A missing or failing renderer only costs the changelog display.
    """

    script = config.changelog_script
    cmd = [str(script), "HEAD", since]
    LOG.debug("Running changelog command: %s", " ".join(cmd))
    try:
        completed = subprocess.run(cmd, cwd=config.zsh_dir, check=False)
    except OSError as exc:  # noqa: BLE001
        LOG.warning("Could not run changelog script %s: %s", script, exc)
        return
    if completed.returncode != 0:
        LOG.warning("Changelog script exited with status %d", completed.returncode)


def run_upgrade(
    config: Config,
    capabilities: Capabilities,
    out: Optional[TextIO] = None,
) -> UpgradeResult:
    """
    Update the installation in config.zsh_dir and report the outcome.
    """

    if out is None:
        out = sys.stdout
    report = _Reporter(Formatter(capabilities), out)
    cwd = config.zsh_dir

    LOG.debug("Starting omz-upgrade with config: %s", config)

    normalize_remote(cwd=cwd)
    apply_fixups(cwd=cwd)

    reset_auto_stash = capture_auto_stash(cwd=cwd)
    enable_auto_stash(cwd=cwd)

    remote = get_setting("remote", DEFAULT_REMOTE, cwd=cwd)
    branch = get_setting("branch", DEFAULT_BRANCH, cwd=cwd)

    try:
        last_head = capture_head(cwd=cwd)
        checkout(branch, cwd=cwd)
    except (CheckoutError, GitStateError) as exc:
        LOG.error("%s", exc)
        report.error(MSG_FAILED)
        # HEAD was not moved, but auto-stash was already enabled.
        restore_auto_stash(reset_auto_stash, cwd=cwd)
        return UpgradeResult(status=STATUS_ABORTED, exit_code=1, message=MSG_FAILED)

    LOG.info("Updating %s from %s/%s (previous HEAD: %s)", cwd, remote, branch, last_head)
    try:
        return _pull_and_report(config, report, remote, branch)
    finally:
        try:
            checkout(last_head, cwd=cwd)
        except CheckoutError as exc:
            # The pull outcome stands; the user is left on the update branch.
            LOG.error("Could not return to %s after updating: %s", last_head, exc)
        finally:
            restore_auto_stash(reset_auto_stash, cwd=cwd)


def _pull_and_report(
    config: Config,
    report: _Reporter,
    remote: str,
    branch: str,
) -> UpgradeResult:
    cwd = config.zsh_dir
    last_commit = rev_parse(branch, cwd=cwd)

    report.info(MSG_UPDATING)
    try:
        pull_rebase(remote, branch, cwd=cwd)
    except PullError as exc:
        LOG.info("%s", exc)
        report.error(MSG_FAILED)
        return UpgradeResult(
            status=STATUS_FAILED,
            exit_code=exc.returncode,
            message=MSG_FAILED,
        )

    if rev_parse("HEAD", cwd=cwd) == last_commit:
        report.success(MSG_UP_TO_DATE)
        return UpgradeResult(status=STATUS_UP_TO_DATE, exit_code=0, message=MSG_UP_TO_DATE)

    set_setting("lastVersion", last_commit, cwd=cwd)
    if config.interactive:
        show_changelog(config, last_commit)
    report.changelog_hint()
    report.success(MSG_UPDATED)
    return UpgradeResult(
        status=STATUS_UPDATED,
        exit_code=0,
        message=MSG_UPDATED,
        last_version=last_commit,
    )
