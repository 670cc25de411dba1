import subprocess

from omz_upgrade.errors import GitError, PullError
from omz_upgrade.git_adapter import _run_git, get_config, list_remotes, pull_rebase


def _completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(
        args=["git"],
        returncode=returncode,
        stdout=stdout,
        stderr=stderr,
    )


def test_run_git_includes_stderr_details_on_failure(monkeypatch):
    monkeypatch.setattr(
        "omz_upgrade.git_adapter.subprocess.run",
        lambda *args, **kwargs: _completed(128, stderr="fatal: not a git repository"),
    )

    try:
        _run_git(["status"])
    except GitError as exc:
        message = str(exc)
        assert "git status" in message
        assert "fatal: not a git repository" in message
    else:
        raise AssertionError("expected GitError to be raised")


def test_get_config_returns_none_for_missing_key(monkeypatch):
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        return _completed(1)

    monkeypatch.setattr("omz_upgrade.git_adapter.subprocess.run", fake_run)

    assert get_config("rebase.autoStash", local=True, as_bool=True) is None
    assert calls == [["git", "config", "--local", "--bool", "--get", "rebase.autoStash"]]


def test_get_config_strips_value(monkeypatch):
    monkeypatch.setattr(
        "omz_upgrade.git_adapter.subprocess.run",
        lambda *args, **kwargs: _completed(0, stdout="develop\n"),
    )
    assert get_config("oh-my-zsh.branch") == "develop"


def test_list_remotes_reports_fetch_urls_once(monkeypatch):
    output = (
        "origin\thttps://github.com/ohmyzsh/ohmyzsh.git (fetch)\n"
        "origin\thttps://github.com/ohmyzsh/ohmyzsh.git (push)\n"
        "fork\tgit@github.com:me/ohmyzsh.git (fetch)\n"
        "fork\tgit@github.com:me/ohmyzsh.git (push)\n"
    )
    monkeypatch.setattr(
        "omz_upgrade.git_adapter.subprocess.run",
        lambda *args, **kwargs: _completed(0, stdout=output),
    )

    remotes = list_remotes()
    assert [(r.name, r.url) for r in remotes] == [
        ("origin", "https://github.com/ohmyzsh/ohmyzsh.git"),
        ("fork", "git@github.com:me/ohmyzsh.git"),
    ]


def test_pull_rebase_clears_lang_and_raises_with_returncode(monkeypatch):
    seen = {}

    def fake_run(cmd, cwd=None, env=None, check=False):
        seen["cmd"] = cmd
        seen["env"] = env
        return subprocess.CompletedProcess(args=cmd, returncode=1)

    monkeypatch.setattr("omz_upgrade.git_adapter.subprocess.run", fake_run)

    try:
        pull_rebase("origin", "master")
    except PullError as exc:
        assert exc.returncode == 1
    else:
        raise AssertionError("expected PullError to be raised")

    assert seen["cmd"] == ["git", "pull", "--quiet", "--rebase", "origin", "master"]
    assert seen["env"]["LANG"] == ""
