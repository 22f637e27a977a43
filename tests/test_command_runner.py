import subprocess

from command_runner import CommandResult, CommandRunner


def test_run_captures_stdout():
    result = CommandRunner().run(["echo", "hello"])
    assert result.ok
    assert result.stdout == "hello\n"


def test_non_zero_exit_is_a_failure():
    assert not CommandRunner().run(["false"]).ok


def test_missing_program_is_a_failure():
    result = CommandRunner().run(["/nonexistent/bin/hostfetch-probe"])
    assert result == CommandResult(ok=False, stdout="")


def test_timeout_is_a_failure(monkeypatch):
    seen = {}

    def _run(argv, **kwargs):
        seen.update(kwargs)
        raise subprocess.TimeoutExpired(argv, kwargs["timeout"])

    monkeypatch.setattr(subprocess, "run", _run)
    result = CommandRunner(timeout=0.5).run(["curl", "-s", "ifconfig.me"])
    assert not result.ok
    assert seen["timeout"] == 0.5


def test_lines_skips_blank_lines():
    result = CommandResult(ok=True, stdout="a\n\n  \nb\n")
    assert result.lines() == ["a", "b"]
