"""Shell execution utilities.

Runs a command through the platform's shell (bash, PowerShell or Git Bash on
Windows), waits for it to exit, and returns the exit code together with every
stdout and stderr line.

Example:
    from shellrun.shell import Shell

    result = Shell.run("ls -la", working_directory="/tmp")
    if result.success:
        print(result.output)

    # Explicit interpreter: the command becomes its argument line
    result = Shell.run("--version", interpreter="git")
"""

from .cancel import CancelToken
from .errors import (
    CommandCancelledError,
    CommandTimeoutError,
    ShellError,
    ShellNotFoundError,
    WorkingDirectoryNotFoundError,
)
from .executor import ProcessExecutor
from .output import OutputAggregator
from .platform import HostPlatform, Platform
from .resolver import InterpreterResolver
from .shell import Shell
from .types import Invocation, ShellCommandRequest, ShellCommandResult

__all__ = [
    "CancelToken",
    "CommandCancelledError",
    "CommandTimeoutError",
    "HostPlatform",
    "InterpreterResolver",
    "Invocation",
    "OutputAggregator",
    "Platform",
    "ProcessExecutor",
    "Shell",
    "ShellCommandRequest",
    "ShellCommandResult",
    "ShellError",
    "ShellNotFoundError",
    "WorkingDirectoryNotFoundError",
]
