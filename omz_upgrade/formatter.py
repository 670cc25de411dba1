"""
Styled output for omz-upgrade.

Everything here builds strings; the orchestrator decides when to write
them. All styling degrades to plain text when stdout is not a terminal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .terminal import Capabilities

ESC = "\033"
BEL = "\a"

TRUECOLOR_RAINBOW = (
    (255, 0, 0),
    (255, 97, 0),
    (247, 255, 0),
    (0, 255, 30),
    (77, 0, 255),
    (168, 0, 255),
    (245, 0, 172),
)

# 256-color approximations of TRUECOLOR_RAINBOW.
FALLBACK_RAINBOW = ("196", "202", "226", "082", "021", "093", "163")

# Each row is split into the seven segments that get one rainbow color each.
BANNER_ROWS = (
    ("         ", "__      ", "           ", "        ", "       ", "     ", "__   "),
    ("  ____  ", "/ /_    ", " ____ ___  ", "__  __  ", " ____  ", "_____", "/ /_  "),
    (" / __ \\", "/ __ \\  ", " / __ `__ \\", "/ / / / ", " /_  / ", "/ ___/", " __ \\ "),
    ("/ /_/ /", " / / / ", " / / / / / /", " /_/ / ", "   / /_", "(__  )", " / / / "),
    ("\\____/", "_/ /_/ ", " /_/ /_/ /_/", "\\__, / ", "   /___/", "____/", "_/ /_/  "),
    ("    ", "        ", "           ", " /____/ ", "       ", "     ", "          "),
)


def _sgr(code: str) -> str:
    return f"{ESC}[{code}m"


@dataclass(frozen=True)
class Palette:
    """
    Escape codes used for status output.

    All entries are empty strings when output is not a terminal, so
    callers can concatenate them unconditionally.
    """

    rainbow: Tuple[str, ...]
    info: str
    error: str
    warn: str
    bold: str
    reset: str


PLAIN_PALETTE = Palette(
    rainbow=("",) * len(TRUECOLOR_RAINBOW),
    info="",
    error="",
    warn="",
    bold="",
    reset="",
)


def build_palette(capabilities: Capabilities) -> Palette:
    """
    Select the palette for the detected terminal.
    """

    if not capabilities.is_interactive:
        return PLAIN_PALETTE

    if capabilities.supports_truecolor:
        rainbow = tuple(_sgr(f"38;2;{r};{g};{b}") for r, g, b in TRUECOLOR_RAINBOW)
    else:
        rainbow = tuple(_sgr(f"38;5;{code}") for code in FALLBACK_RAINBOW)

    return Palette(
        rainbow=rainbow,
        info=_sgr("34"),
        error=_sgr("31"),
        warn=_sgr("33"),
        bold=_sgr("1"),
        reset=_sgr("0"),
    )


class Formatter:
    """
    Render links, underlines, and colored text for one terminal.
    """

    def __init__(self, capabilities: Capabilities, palette: Optional[Palette] = None) -> None:
        self.capabilities = capabilities
        self.palette = palette if palette is not None else build_palette(capabilities)

    def link(self, text: str, url: str, fallback: str = "url") -> str:
        """
        Render a clickable link.

        Without hyperlink support, fallback="text" shows only the text
        and anything else shows the underlined URL.
        """

        if self.capabilities.supports_hyperlinks:
            return f"{ESC}]8;;{url}{BEL}{text}{ESC}]8;;{BEL}"
        if fallback == "text":
            return text
        return self.underline(url)

    def underline(self, text: str) -> str:
        if self.capabilities.is_interactive:
            return f"{ESC}[4m{text}{ESC}[24m"
        return text

    def style(self, text: str, *codes: str) -> str:
        prefix = "".join(codes)
        if not prefix:
            return text
        return f"{prefix}{text}{self.palette.reset}"

    def banner(self) -> List[str]:
        """
        Return the rainbow "oh my zsh" logo, one string per row.
        """

        lines = []
        for row in BANNER_ROWS:
            parts = [color + segment for color, segment in zip(self.palette.rainbow, row)]
            lines.append("".join(parts) + self.palette.reset)
        return lines
