"""
Configuration model for omz-upgrade.

The CLI constructs a Config instance and passes it down into the
orchestrator so behavior can be adjusted without relying on global state.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

# git config section holding this tool's repository-scoped settings.
SETTINGS_NAMESPACE = "oh-my-zsh"

DEFAULT_REMOTE = "origin"
DEFAULT_BRANCH = "master"

# Relative to the installation directory.
CHANGELOG_SCRIPT = Path("tools") / "changelog.sh"


@dataclass
class Config:
    """
    Top-level configuration for an omz-upgrade run.

    zsh_dir is the Oh My Zsh working copy to update; interactive enables
    the changelog display after a successful update.
    """

    zsh_dir: str = "."
    interactive: bool = False
    verbosity: int = 0

    @property
    def changelog_script(self) -> Path:
        # Absolute, since the script runs with zsh_dir as its cwd.
        return (Path(self.zsh_dir) / CHANGELOG_SCRIPT).resolve()


def resolve_zsh_dir(explicit: Optional[str], env: Optional[Mapping[str, str]] = None) -> str:
    """
    Pick the installation directory: --zsh-dir, then $ZSH, then the cwd.

    The result is always an absolute path.
    """

    if env is None:
        env = os.environ
    chosen = explicit or env.get("ZSH") or os.getcwd()
    return str(Path(chosen).resolve())
