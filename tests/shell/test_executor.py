import sys
import threading
import time
from pathlib import Path

import pytest

from shellrun.shell import (
    CancelToken,
    CommandCancelledError,
    CommandTimeoutError,
    Invocation,
    ProcessExecutor,
    Shell,
    WorkingDirectoryNotFoundError,
)
from shellrun.shell.executor import split_argument_line
from tests.helpers import FakePlatform

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="runs bash")


def test_windows_argv_is_raw_command_line() -> None:
    executor = ProcessExecutor(FakePlatform(windows=True))
    invocation = Invocation(
        executable="C:\\Program Files\\Git\\bin\\bash.exe",
        arguments='-c "echo \\"hi\\""',
    )

    assert executor.argv(invocation) == '"C:\\Program Files\\Git\\bin\\bash.exe" -c "echo \\"hi\\""'


def test_windows_argv_without_arguments() -> None:
    executor = ProcessExecutor(FakePlatform(windows=True))

    assert executor.argv(Invocation(executable="tool.exe")) == "tool.exe"


def test_posix_argv_passes_wrapped_script_unchanged() -> None:
    executor = ProcessExecutor(FakePlatform(windows=False))
    invocation = Invocation(executable="bash", arguments='-c "echo a\\"', script="echo a\\")

    assert executor.argv(invocation) == ["bash", "-c", "echo a\\"]


def test_posix_argv_splits_caller_argument_line() -> None:
    executor = ProcessExecutor(FakePlatform(windows=False))
    invocation = Invocation(executable="tool", arguments='-c "echo \\"a b\\" $HOME"')

    assert executor.argv(invocation) == ["tool", "-c", 'echo "a b" $HOME']


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("", []),
        ("  a   b\tc ", ["a", "b", "c"]),
        ('"a b" c', ["a b", "c"]),
        (r"a\\b", [r"a\\b"]),
        (r'"a\\b"', [r"a\\b"]),
        (r'a\"b', ['a"b']),
        (r'"a\\" b', ["a\\", "b"]),
        (r'"a\\\"b"', [r'a\"b']),
        ('"say ""hi"""', ['say "hi"']),
        ('"" x', ["", "x"]),
        ('-c "print(1)', ["-c", "print(1)"]),
        ("trailing\\", ["trailing\\"]),
    ],
)
def test_split_argument_line_follows_windows_rules(line: str, expected: list[str]) -> None:
    assert split_argument_line(line) == expected


def test_missing_working_directory_fails_before_spawn(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    spawned: list[object] = []
    monkeypatch.setattr(
        "shellrun.shell.executor.subprocess.Popen",
        lambda *args, **kwargs: spawned.append(args),
    )
    missing = str(tmp_path / "does" / "not" / "exist")

    with pytest.raises(WorkingDirectoryNotFoundError) as exc_info:
        Shell.run("echo hello", working_directory=missing)

    assert exc_info.value.path == missing
    assert spawned == []


def test_working_directory_must_be_a_directory(tmp_path: Path) -> None:
    target = tmp_path / "file.txt"
    target.write_text("x", encoding="utf-8")

    with pytest.raises(WorkingDirectoryNotFoundError):
        ProcessExecutor().execute(Invocation(executable="bash"), str(target))


@posix_only
def test_echo_returns_output_and_zero_exit() -> None:
    result = Shell.run("echo hello")

    assert result.exit_code == 0
    assert result.success is True
    assert result.output == "hello\n"


@posix_only
def test_exit_code_is_returned_without_output() -> None:
    result = Shell.run("exit 42")

    assert result.exit_code == 42
    assert result.success is False
    assert result.output == ""


@posix_only
def test_stdout_and_stderr_are_merged() -> None:
    result = Shell.run("echo out; echo err 1>&2")

    assert result.exit_code == 0
    assert sorted(result.lines()) == ["err", "out"]


@posix_only
def test_embedded_double_quotes_reach_output_unescaped() -> None:
    result = Shell.run("echo 'say \"hi\" twice'")

    assert result.output == 'say "hi" twice\n'


@posix_only
def test_double_quoted_argument_round_trips() -> None:
    result = Shell.run('printf "%s\\n" "a  b"')

    assert result.output == "a  b\n"


@posix_only
def test_runs_in_working_directory(tmp_path: Path) -> None:
    result = Shell.run("pwd", working_directory=str(tmp_path))

    assert Path(result.output.strip()).resolve() == tmp_path.resolve()


@posix_only
def test_double_backslashes_reach_bash_unchanged() -> None:
    result = Shell.run(r"printf '%s\n' 'a\\b'")

    assert result.output == "a\\\\b\n"


@posix_only
def test_trailing_backslash_runs_the_command() -> None:
    result = Shell.run("echo a\\")

    assert result.exit_code == 0
    assert result.output == "a\\\n"


@posix_only
def test_unbalanced_quote_in_argument_line_still_runs() -> None:
    result = Shell.run('-c "print(1)', interpreter=sys.executable)

    assert result.exit_code == 0
    assert result.output == "1\n"


@posix_only
def test_signal_death_is_reported_like_a_shell() -> None:
    result = Shell.run("kill -9 $$")

    assert result.exit_code == 137
    assert result.success is False


@posix_only
def test_interpreter_override_receives_arguments_verbatim() -> None:
    command = '-c "import sys; print(sys.argv[1:])" one "two three" "back\\\\slash"'

    result = Shell.run(command, interpreter=sys.executable)

    assert result.exit_code == 0
    assert result.output == "['one', 'two three', 'back\\\\\\\\slash']\n"


@posix_only
def test_missing_interpreter_error_propagates() -> None:
    with pytest.raises(FileNotFoundError):
        Shell.run("--version", interpreter="/nonexistent/interpreter-binary")


@posix_only
@pytest.mark.parametrize("attempt", range(3))
def test_interleaved_streams_keep_every_line_whole(attempt: int) -> None:
    count = 300
    command = (
        f"for i in $(seq 1 {count}); do "
        "echo \"stdout line $i\"; echo \"stderr line $i\" 1>&2; "
        "done"
    )

    result = Shell.run(command)
    lines = result.lines()

    assert result.exit_code == 0
    assert len(lines) == 2 * count
    out = [line for line in lines if line.startswith("stdout line ")]
    err = [line for line in lines if line.startswith("stderr line ")]
    assert out == [f"stdout line {i}" for i in range(1, count + 1)]
    assert err == [f"stderr line {i}" for i in range(1, count + 1)]


@posix_only
def test_last_line_without_newline_is_terminated() -> None:
    result = Shell.run("printf 'no newline'")

    assert result.output == "no newline\n"


@posix_only
def test_timeout_kills_the_process() -> None:
    started = time.monotonic()

    with pytest.raises(CommandTimeoutError) as exc_info:
        Shell.run("sleep 10", timeout=0.3)

    assert time.monotonic() - started < 5
    assert exc_info.value.timeout == 0.3
    assert exc_info.value.command == "sleep 10"


@posix_only
def test_timeout_kills_background_children_holding_pipes() -> None:
    started = time.monotonic()

    with pytest.raises(CommandTimeoutError):
        Shell.run("sleep 10 & echo started", timeout=0.5)

    assert time.monotonic() - started < 5


@posix_only
def test_cancel_token_stops_a_running_command() -> None:
    cancel = CancelToken()
    timer = threading.Timer(0.3, cancel.cancel)
    timer.start()
    started = time.monotonic()
    try:
        with pytest.raises(CommandCancelledError) as exc_info:
            Shell.run("sleep 10", cancel=cancel)
    finally:
        timer.cancel()

    assert not isinstance(exc_info.value, CommandTimeoutError)
    assert time.monotonic() - started < 5


@posix_only
def test_cancelled_token_before_start_raises(tmp_path: Path) -> None:
    cancel = CancelToken()
    cancel.cancel()

    with pytest.raises(CommandCancelledError):
        Shell.run("sleep 1; touch marker", working_directory=str(tmp_path), cancel=cancel)

    time.sleep(1.5)
    assert not (tmp_path / "marker").exists()
