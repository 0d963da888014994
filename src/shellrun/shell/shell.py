"""Run a shell command and return its exit code and merged output."""

from __future__ import annotations

import asyncio
from typing import Optional

from ..core.config import ConfigManager
from ..util.log import Log
from .cancel import CancelToken
from .executor import ProcessExecutor, resolve_working_directory
from .platform import Platform
from .resolver import InterpreterResolver
from .types import Invocation, ShellCommandRequest, ShellCommandResult

log = Log.create({"service": "shell"})


class Shell:
    """Entry points for running commands.

    Each call resolves its interpreter, spawns one process and blocks until it
    exits. Nothing is shared between calls, so concurrent calls from different
    threads are independent.
    """

    @classmethod
    def request(
        cls,
        command: str,
        working_directory: Optional[str] = None,
        interpreter: Optional[str] = None,
        prefer_powershell: Optional[bool] = None,
    ) -> ShellCommandRequest:
        """Build a request, filling unset options from configuration."""
        config = ConfigManager.get().shell
        return ShellCommandRequest(
            command=command,
            working_directory=working_directory,
            interpreter=interpreter or config.interpreter,
            prefer_powershell=config.prefer_powershell if prefer_powershell is None else prefer_powershell,
        )

    @classmethod
    def resolve(cls, request: ShellCommandRequest, platform: Optional[Platform] = None) -> Invocation:
        return InterpreterResolver(platform).resolve(request)

    @classmethod
    def execute(
        cls,
        request: ShellCommandRequest,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[CancelToken] = None,
        platform: Optional[Platform] = None,
    ) -> ShellCommandResult:
        """Run a prebuilt request.

        The working directory is checked first, then the interpreter is
        resolved; a failure in either means no process is started.
        """
        resolve_working_directory(request.working_directory)
        invocation = InterpreterResolver(platform).resolve(request)
        log.info("executing command", {"shell": invocation.executable, "command": request.command})
        return ProcessExecutor(platform).execute(
            invocation,
            request.working_directory,
            timeout=timeout,
            cancel=cancel,
            command=request.command,
        )

    @classmethod
    def run(
        cls,
        command: str,
        working_directory: Optional[str] = None,
        interpreter: Optional[str] = None,
        prefer_powershell: Optional[bool] = None,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[CancelToken] = None,
    ) -> ShellCommandResult:
        """Run ``command`` and wait for it to finish.

        Args:
            command: Command text. Without ``interpreter`` it is run through
                ``bash -c`` (PowerShell or Git Bash on Windows); with one it is
                passed verbatim as that program's arguments.
            working_directory: Directory to run in; must exist. Defaults to the
                current directory.
            interpreter: Explicit executable to launch.
            prefer_powershell: On Windows, use PowerShell instead of Git Bash.
                ``None`` uses the configured default.
            timeout: Seconds before the process is killed. ``None`` uses the
                configured default, which is to wait indefinitely.
            cancel: Token that kills the process when cancelled.

        Raises:
            WorkingDirectoryNotFoundError: ``working_directory`` is missing.
            ShellNotFoundError: No Git Bash was found on Windows.
            CommandTimeoutError: The timeout elapsed.
            CommandCancelledError: ``cancel`` was triggered.
            OSError: The interpreter could not be launched.
        """
        request = cls.request(command, working_directory, interpreter, prefer_powershell)
        if timeout is None:
            timeout = ConfigManager.get().shell.timeout
        return cls.execute(request, timeout=timeout, cancel=cancel)

    @classmethod
    async def run_async(
        cls,
        command: str,
        working_directory: Optional[str] = None,
        interpreter: Optional[str] = None,
        prefer_powershell: Optional[bool] = None,
        *,
        timeout: Optional[float] = None,
    ) -> ShellCommandResult:
        """Awaitable ``run``; cancelling the awaiting task kills the process."""
        cancel = CancelToken()
        try:
            return await asyncio.to_thread(
                cls.run,
                command,
                working_directory,
                interpreter,
                prefer_powershell,
                timeout=timeout,
                cancel=cancel,
            )
        except asyncio.CancelledError:
            cancel.cancel()
            raise
