"""Process spawning and output capture."""

from __future__ import annotations

import os
import queue
import signal
import subprocess
import threading
import time
from typing import IO, Optional

from ..util.log import Log
from .cancel import CancelToken
from .errors import CommandCancelledError, CommandTimeoutError, WorkingDirectoryNotFoundError
from .output import OutputAggregator
from .platform import HostPlatform, Platform
from .types import Invocation, ShellCommandResult

log = Log.create({"service": "shell.executor"})

POLL_INTERVAL = 0.05

_EOF = object()


def resolve_working_directory(working_directory: Optional[str]) -> str:
    """Return the directory to run in, failing if a given one is missing."""
    if working_directory is None:
        return os.getcwd()
    if not os.path.isdir(working_directory):
        raise WorkingDirectoryNotFoundError(working_directory)
    return working_directory


def split_argument_line(line: str) -> list[str]:
    """Split a raw argument line the way Windows launchers do.

    Whitespace separates arguments outside double quotes. A run of 2n
    backslashes before a `"` yields n backslashes and the quote toggles
    quoting; 2n+1 backslashes yield n backslashes and a literal `"`.
    Backslashes before anything else are literal, and `""` inside quotes is a
    literal `"`. An unterminated quote runs to the end of the line.
    """
    args: list[str] = []
    current: list[str] = []
    in_token = False
    in_quotes = False
    i = 0

    while i < len(line):
        ch = line[i]
        if ch == "\\":
            start = i
            while i < len(line) and line[i] == "\\":
                i += 1
            count = i - start
            if i < len(line) and line[i] == '"':
                current.append("\\" * (count // 2))
                if count % 2:
                    current.append('"')
                    i += 1
            else:
                current.append("\\" * count)
            in_token = True
            continue
        if ch == '"':
            if in_quotes and line[i + 1 : i + 2] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
            in_token = True
        elif ch in " \t" and not in_quotes:
            if in_token:
                args.append("".join(current))
                current = []
                in_token = False
        else:
            current.append(ch)
            in_token = True
        i += 1

    if in_token:
        args.append("".join(current))
    return args


def _pump(stream: IO[bytes], lines: "queue.Queue[object]") -> None:
    """Forward each decoded line of a pipe to the queue, then an EOF marker."""
    try:
        for raw in iter(stream.readline, b""):
            lines.put(raw.decode("utf-8", errors="replace").rstrip("\r\n"))
    finally:
        stream.close()
        lines.put(_EOF)


class ProcessExecutor:
    """Runs an invocation to completion and collects its output.

    stdout and stderr are read by one thread each. Both readers feed a queue
    drained by the calling thread, which is the only writer of the
    ``OutputAggregator``.
    """

    def __init__(self, platform: Optional[Platform] = None):
        self.platform = platform or HostPlatform()

    def argv(self, invocation: Invocation) -> list[str] | str:
        """Build what ``Popen`` receives for an invocation.

        Windows takes the raw argument line as is. Elsewhere a command wrapped
        by the resolver goes to the interpreter unchanged after `-c`, and a
        caller-supplied argument line is split with `split_argument_line`.
        """
        if self.platform.is_windows():
            line = subprocess.list2cmdline([invocation.executable])
            if invocation.arguments:
                line = f"{line} {invocation.arguments}"
            return line
        if invocation.script is not None:
            return [invocation.executable, "-c", invocation.script]
        return [invocation.executable, *split_argument_line(invocation.arguments)]

    def _popen_options(self) -> dict[str, object]:
        if self.platform.is_windows():
            return {"creationflags": getattr(subprocess, "CREATE_NO_WINDOW", 0)}
        return {"start_new_session": True}

    def _kill(self, process: subprocess.Popen[bytes]) -> None:
        # POSIX kills the whole process group, including background children
        # still holding the pipes.
        if not self.platform.is_windows():
            try:
                os.killpg(process.pid, signal.SIGKILL)
                return
            except ProcessLookupError:
                return
            except PermissionError:
                pass
        if process.poll() is None:
            process.kill()

    def execute(
        self,
        invocation: Invocation,
        working_directory: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[CancelToken] = None,
        command: Optional[str] = None,
    ) -> ShellCommandResult:
        """Spawn the process, wait for it to exit and return its result.

        Raises:
            WorkingDirectoryNotFoundError: ``working_directory`` does not exist.
                Nothing is spawned.
            CommandTimeoutError: ``timeout`` seconds elapsed; the process was killed.
            CommandCancelledError: ``cancel`` was triggered; the process was killed.
            OSError: The OS could not launch the executable.
        """
        cwd = resolve_working_directory(working_directory)
        args = self.argv(invocation)
        label = command or invocation.arguments or invocation.executable

        timer = log.time("running command", {"executable": invocation.executable, "cwd": cwd})
        process = subprocess.Popen(
            args,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=cwd,
            **self._popen_options(),  # type: ignore[arg-type]
        )
        assert process.stdout is not None and process.stderr is not None

        lines: "queue.Queue[object]" = queue.Queue()
        readers = [
            threading.Thread(target=_pump, args=(stream, lines), name=f"shellrun-{name}", daemon=True)
            for name, stream in (("stdout", process.stdout), ("stderr", process.stderr))
        ]
        for reader in readers:
            reader.start()

        output = OutputAggregator()
        deadline = time.monotonic() + timeout if timeout is not None else None
        stopped: Optional[CommandCancelledError] = None

        def check_stop() -> None:
            nonlocal stopped
            if stopped is not None:
                return
            if cancel is not None and cancel.cancelled:
                stopped = CommandCancelledError(label)
            elif deadline is not None and time.monotonic() >= deadline:
                stopped = CommandTimeoutError(label, timeout or 0)
            else:
                return
            log.warn("killing command", {"pid": process.pid, "reason": str(stopped)})
            self._kill(process)

        try:
            open_streams = len(readers)
            while open_streams:
                check_stop()
                try:
                    item = lines.get(timeout=POLL_INTERVAL)
                except queue.Empty:
                    continue
                if item is _EOF:
                    open_streams -= 1
                else:
                    output.append_line(item)  # type: ignore[arg-type]

            while True:
                try:
                    exit_code = process.wait(timeout=POLL_INTERVAL)
                    break
                except subprocess.TimeoutExpired:
                    check_stop()
        except BaseException:
            self._kill(process)
            raise
        finally:
            for reader in readers:
                reader.join()

        if stopped is not None:
            timer.stop(cancelled=True)
            raise stopped

        if exit_code < 0:
            # Killed by a signal; report it the way shells do.
            exit_code = 128 - exit_code

        timer.stop(exit_code=exit_code, lines=output.line_count)
        return ShellCommandResult(exit_code=exit_code, output=output.text())
