"""Error formatting utilities.

Turns known shell errors into short user-facing messages and falls back to a
full traceback for anything else.
"""

import json
import traceback
from typing import Any

from ..shell.errors import (
    CommandCancelledError,
    CommandTimeoutError,
    ShellNotFoundError,
    WorkingDirectoryNotFoundError,
)


def format_error(error: Any) -> str | None:
    """Format known application errors into user-friendly messages.

    Returns None if the error type is not recognized, allowing
    fallback to format_unknown_error.
    """
    if isinstance(error, WorkingDirectoryNotFoundError):
        return f"Working directory \"{error.path}\" does not exist."
    if isinstance(error, ShellNotFoundError):
        checked = "\n".join(f"  {path}" for path in error.checked)
        return (
            "Git Bash was not found. Install Git for Windows or add bash.exe to PATH.\n"
            f"Looked in:\n{checked}"
        )
    if isinstance(error, CommandTimeoutError):
        return f"Command timed out after {error.timeout:g}s: {error.command}"
    if isinstance(error, CommandCancelledError):
        return f"Command was cancelled: {error.command}"
    if isinstance(error, FileNotFoundError) and error.filename:
        return f"Executable not found: {error.filename}"
    return None


def format_unknown_error(error: Any) -> str:
    """Format any error into a string representation.

    Handles Exception objects, serializable objects, and primitives.
    """
    if isinstance(error, Exception):
        if error.__traceback__:
            return ''.join(traceback.format_exception(type(error), error, error.__traceback__))
        return f"{error.__class__.__name__}: {error}"

    if isinstance(error, (dict, list)):
        try:
            return json.dumps(error, indent=2)
        except (TypeError, ValueError):
            return "Unexpected error (unserializable)"

    return str(error)
