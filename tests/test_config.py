from pathlib import Path

from omz_upgrade.config import Config, resolve_zsh_dir


def test_resolve_zsh_dir_prefers_explicit_then_env(tmp_path, monkeypatch):
    assert resolve_zsh_dir("/opt/omz", env={"ZSH": "/home/me/.oh-my-zsh"}) == "/opt/omz"
    assert resolve_zsh_dir(None, env={"ZSH": "/home/me/.oh-my-zsh"}) == "/home/me/.oh-my-zsh"

    monkeypatch.chdir(tmp_path)
    assert resolve_zsh_dir(None, env={}) == str(Path.cwd())


def test_changelog_script_lives_under_tools():
    config = Config(zsh_dir="/home/me/.oh-my-zsh")
    assert config.changelog_script == Path("/home/me/.oh-my-zsh/tools/changelog.sh")


def test_relative_zsh_dir_becomes_absolute(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    expected = str((Path.cwd() / "install").resolve())

    assert resolve_zsh_dir("install", env={}) == expected
    assert resolve_zsh_dir(None, env={"ZSH": "install"}) == expected


def test_changelog_script_is_absolute_for_relative_zsh_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    script = Config(zsh_dir="install").changelog_script

    assert script.is_absolute()
    assert script == (Path.cwd() / "install" / "tools" / "changelog.sh").resolve()
