from shellrun.shell import (
    CommandCancelledError,
    CommandTimeoutError,
    ShellNotFoundError,
    WorkingDirectoryNotFoundError,
)
from shellrun.util.error import format_error, format_unknown_error


def test_format_error_knows_shell_errors() -> None:
    assert format_error(WorkingDirectoryNotFoundError("/nope")) == 'Working directory "/nope" does not exist.'
    assert format_error(CommandTimeoutError("sleep 9", 1.5)) == "Command timed out after 1.5s: sleep 9"
    assert format_error(CommandCancelledError("sleep 9")) == "Command was cancelled: sleep 9"


def test_format_error_lists_checked_bash_paths() -> None:
    text = format_error(ShellNotFoundError(["C:\\a\\bash.exe", "C:\\b\\bash.exe"]))

    assert text is not None
    assert "C:\\a\\bash.exe" in text
    assert "C:\\b\\bash.exe" in text


def test_format_error_returns_none_for_unknown_errors() -> None:
    assert format_error(RuntimeError("boom")) is None


def test_format_unknown_error_handles_values() -> None:
    assert format_unknown_error(RuntimeError("boom")) == "RuntimeError: boom"
    assert format_unknown_error({"a": 1}) == '{\n  "a": 1\n}'
    assert format_unknown_error(42) == "42"


def test_format_unknown_error_includes_traceback() -> None:
    try:
        raise ValueError("bad value")
    except ValueError as e:
        text = format_unknown_error(e)

    assert "Traceback" in text
    assert "ValueError: bad value" in text
