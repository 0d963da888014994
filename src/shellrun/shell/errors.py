"""Shell execution errors."""

from __future__ import annotations

from typing import Sequence


class ShellError(Exception):
    """Base class for failures raised while running a shell command."""


class WorkingDirectoryNotFoundError(ShellError):
    """Raised before spawning when the requested working directory is missing."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Working directory not found: {path}")


class ShellNotFoundError(ShellError):
    """Raised when no bash-compatible interpreter exists on Windows."""

    def __init__(self, checked: Sequence[str]):
        self.checked = list(checked)
        lines = "\n".join(f"  - {path}" for path in self.checked) or "  (no candidates)"
        super().__init__(
            "Failed to find `bash.exe` on Windows. Is Git Bash installed and on PATH? "
            f"Checked:\n{lines}"
        )


class CommandCancelledError(ShellError):
    """Raised when a running command is cancelled and its process killed."""

    def __init__(self, command: str, message: str | None = None):
        self.command = command
        super().__init__(message or f"Command cancelled: {command}")


class CommandTimeoutError(CommandCancelledError):
    """Raised when a command outlives its timeout and is killed."""

    def __init__(self, command: str, timeout: float):
        self.timeout = timeout
        super().__init__(command, f"Command timed out after {timeout:g}s: {command}")
