"""Interpreter resolution.

Turns a request into the executable to launch and its raw argument line.
"""

from __future__ import annotations

import ntpath
from typing import Optional

from ..util.log import Log
from .errors import ShellNotFoundError
from .platform import HostPlatform, Platform
from .types import Invocation, ShellCommandRequest

log = Log.create({"service": "shell.resolver"})

POSIX_SHELL = "bash"
POWERSHELL = "powershell.exe"
WINDOWS_BASH = "bash.exe"


def escape_command(command: str) -> str:
    """Wrap a command as ``-c "<command>"`` with embedded quotes escaped."""
    escaped = command.replace('"', '\\"')
    return f'-c "{escaped}"'


class InterpreterResolver:
    """Decides which interpreter runs a command and how it is quoted."""

    def __init__(self, platform: Optional[Platform] = None):
        self.platform = platform or HostPlatform()

    def resolve(self, request: ShellCommandRequest) -> Invocation:
        if request.interpreter:
            return Invocation(executable=request.interpreter, arguments=request.command)

        if not self.platform.is_windows():
            executable = POSIX_SHELL
        elif request.prefer_powershell:
            executable = POWERSHELL
        else:
            executable = self.find_windows_bash()

        log.debug("resolved interpreter", {"executable": executable})
        return Invocation(
            executable=executable,
            arguments=escape_command(request.command),
            script=request.command,
        )

    def candidates(self) -> list[str]:
        """Bash locations checked on Windows, in search order."""
        paths = [
            ntpath.join(self.platform.program_files(), "Git", "bin", WINDOWS_BASH),
            ntpath.join(self.platform.program_files_x86(), "Git", "bin", WINDOWS_BASH),
        ]
        paths.extend(
            ntpath.join(directory, WINDOWS_BASH)
            for directory in self.platform.path_directories()
        )
        return paths

    def find_windows_bash(self) -> str:
        checked: list[str] = []
        for candidate in self.candidates():
            checked.append(candidate)
            if self.platform.exists(candidate):
                return candidate

        log.error("bash not found", {"checked": checked})
        raise ShellNotFoundError(checked)
