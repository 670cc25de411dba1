"""
Terminal capability detection for omz-upgrade.

Capabilities are computed once at process start and passed explicitly to
the formatter. Whether stdout is a terminal must never be re-checked from
anywhere else: the answer is only trustworthy when taken in the main
process before any output is captured.

The hyperlink heuristics follow supports-hyperlinks by Kat Marchán
(https://github.com/zkat/supports-hyperlinks, Apache License 2.0). The
truecolor heuristics follow the notes collected by Anton Kochkov
(https://gist.github.com/XVilka/8346728).
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional, TextIO

LOG = logging.getLogger(__name__)

HYPERLINK_TERM_PROGRAMS = frozenset({"Hyper", "iTerm.app", "terminology", "WezTerm"})

TRUECOLOR_COLORTERMS = frozenset({"truecolor", "24bit"})

TRUECOLOR_TERMS = frozenset(
    {
        "iterm",
        "tmux-truecolor",
        "linux-truecolor",
        "xterm-truecolor",
        "screen-truecolor",
    }
)

# First VTE release with OSC 8 support (0.50).
MIN_VTE_VERSION = 5000


@dataclass(frozen=True)
class Capabilities:
    """
    What the output terminal can render.

    Instances are immutable; build one with detect_capabilities().
    """

    is_interactive: bool
    supports_hyperlinks: bool
    supports_truecolor: bool


def is_interactive_output(stream: Optional[TextIO] = None) -> bool:
    """
    Return True if the stream (default: stdout) is attached to a terminal.
    """

    if stream is None:
        stream = sys.stdout
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:
        # Closed stream.
        return False


def supports_hyperlinks(env: Mapping[str, str], is_interactive: bool) -> bool:
    """
    Decide whether the terminal renders OSC 8 hyperlinks.

    The checks run in order and the first one that applies decides:
    FORCE_HYPERLINK always wins, then a non-terminal is ruled out, then
    known emulators are recognized by their environment variables.
    """

    force = env.get("FORCE_HYPERLINK")
    if force:
        return force != "0"

    if not is_interactive:
        return False

    # DomTerm terminal emulator (domterm.org)
    if env.get("DOMTERM"):
        return True

    # VTE-based terminals (Gnome Terminal, Guake, ROXTerm, ...)
    vte_version = env.get("VTE_VERSION")
    if vte_version:
        try:
            return int(vte_version) >= MIN_VTE_VERSION
        except ValueError:
            LOG.debug("Ignoring non-numeric VTE_VERSION %r", vte_version)
            return False

    if env.get("TERM_PROGRAM") in HYPERLINK_TERM_PROGRAMS:
        return True

    if env.get("TERM") == "xterm-kitty":
        return True

    # Windows Terminal and Konsole
    if env.get("WT_SESSION") or env.get("KONSOLE_VERSION"):
        return True

    return False


def supports_truecolor(env: Mapping[str, str]) -> bool:
    """
    Return True if the terminal advertises 24-bit color support.
    """

    if env.get("COLORTERM") in TRUECOLOR_COLORTERMS:
        return True
    return env.get("TERM") in TRUECOLOR_TERMS


def detect_capabilities(
    env: Optional[Mapping[str, str]] = None,
    stream: Optional[TextIO] = None,
) -> Capabilities:
    """
    Compute the capability flags for this process.

    Call this once, early in main(), and hand the result to everything
    that formats output.
    """

    if env is None:
        env = os.environ

    interactive = is_interactive_output(stream)
    capabilities = Capabilities(
        is_interactive=interactive,
        supports_hyperlinks=supports_hyperlinks(env, interactive),
        supports_truecolor=supports_truecolor(env),
    )
    LOG.debug("Detected terminal capabilities: %s", capabilities)
    return capabilities
