import io

from omz_upgrade.terminal import (
    Capabilities,
    detect_capabilities,
    is_interactive_output,
    supports_hyperlinks,
    supports_truecolor,
)


class FakeTTY(io.StringIO):
    def isatty(self):
        return True


def test_force_hyperlink_wins_even_without_terminal():
    env = {"FORCE_HYPERLINK": "1"}
    assert supports_hyperlinks(env, is_interactive=False) is True
    assert supports_hyperlinks(env, is_interactive=True) is True


def test_force_hyperlink_zero_disables_known_terminals():
    env = {"FORCE_HYPERLINK": "0", "DOMTERM": "1", "TERM": "xterm-kitty"}
    assert supports_hyperlinks(env, is_interactive=True) is False


def test_no_hyperlinks_when_not_interactive():
    env = {"DOMTERM": "1", "TERM_PROGRAM": "iTerm.app", "WT_SESSION": "abc"}
    assert supports_hyperlinks(env, is_interactive=False) is False


def test_vte_version_threshold():
    assert supports_hyperlinks({"VTE_VERSION": "5000"}, is_interactive=True) is True
    assert supports_hyperlinks({"VTE_VERSION": "6003"}, is_interactive=True) is True
    assert supports_hyperlinks({"VTE_VERSION": "4802"}, is_interactive=True) is False


def test_old_vte_decides_before_term_program():
    env = {"VTE_VERSION": "3405", "TERM_PROGRAM": "WezTerm"}
    assert supports_hyperlinks(env, is_interactive=True) is False


def test_non_numeric_vte_version_is_not_supported():
    assert supports_hyperlinks({"VTE_VERSION": "abc"}, is_interactive=True) is False


def test_known_term_programs_and_sessions():
    for program in ("Hyper", "iTerm.app", "terminology", "WezTerm"):
        assert supports_hyperlinks({"TERM_PROGRAM": program}, is_interactive=True) is True
    assert supports_hyperlinks({"TERM_PROGRAM": "Apple_Terminal"}, is_interactive=True) is False
    assert supports_hyperlinks({"TERM": "xterm-kitty"}, is_interactive=True) is True
    assert supports_hyperlinks({"WT_SESSION": "1234"}, is_interactive=True) is True
    assert supports_hyperlinks({"KONSOLE_VERSION": "220401"}, is_interactive=True) is True
    assert supports_hyperlinks({"TERM": "xterm-256color"}, is_interactive=True) is False


def test_empty_variables_count_as_unset():
    env = {"FORCE_HYPERLINK": "", "DOMTERM": "", "VTE_VERSION": ""}
    assert supports_hyperlinks(env, is_interactive=True) is False


def test_supports_truecolor():
    assert supports_truecolor({"COLORTERM": "truecolor"}) is True
    assert supports_truecolor({"COLORTERM": "24bit"}) is True
    assert supports_truecolor({"COLORTERM": "256color"}) is False
    assert supports_truecolor({}) is False
    assert supports_truecolor({"TERM": "tmux-truecolor"}) is True
    assert supports_truecolor({"TERM": "xterm-256color"}) is False


def test_is_interactive_output():
    assert is_interactive_output(FakeTTY()) is True
    assert is_interactive_output(io.StringIO()) is False
    assert is_interactive_output(object()) is False


def test_detect_capabilities_uses_given_stream_and_env():
    caps = detect_capabilities(env={"COLORTERM": "truecolor", "DOMTERM": "1"}, stream=FakeTTY())
    assert caps == Capabilities(
        is_interactive=True,
        supports_hyperlinks=True,
        supports_truecolor=True,
    )

    caps = detect_capabilities(env={"DOMTERM": "1"}, stream=io.StringIO())
    assert caps.is_interactive is False
    assert caps.supports_hyperlinks is False
