"""Shell tool: runs one command and reports it as diagnostics."""

from __future__ import annotations

import os
from typing import Optional

from ..core.config import ConfigManager
from ..shell import Shell, ShellCommandRequest, ShellCommandResult, ShellError
from ..util.error import format_error
from ..util.log import Log
from .diagnostic import Diagnostic, DiagnosticSeverity
from .tool import ToolInputError, ToolInputSanitizer, ToolOutput, ToolUnsanitizedInput

log = Log.create({"service": "tool.shell"})


class ShellToolInput(ToolUnsanitizedInput):
    command: str = ""
    interpreter: Optional[str] = None
    prefer_powershell: Optional[bool] = None
    timeout: Optional[float] = None


class ShellToolSanitizer(ToolInputSanitizer[ShellToolInput, ShellCommandRequest]):
    def sanitize(self, unsanitized_input: ShellToolInput) -> ShellCommandRequest:
        command = unsanitized_input.command.strip()
        if not command:
            raise ToolInputError("Command must not be empty.")

        if unsanitized_input.timeout is not None and unsanitized_input.timeout <= 0:
            raise ToolInputError(
                f"Invalid timeout value: {unsanitized_input.timeout}. Timeout must be a positive number."
            )

        working_directory = unsanitized_input.working_directory
        if working_directory:
            working_directory = os.path.abspath(os.path.expanduser(working_directory))

        return Shell.request(
            command,
            working_directory=working_directory or None,
            interpreter=unsanitized_input.interpreter,
            prefer_powershell=unsanitized_input.prefer_powershell,
        )


class ShellToolOutput(ToolOutput[ShellCommandRequest]):
    def __init__(self) -> None:
        super().__init__()
        self.result: Optional[ShellCommandResult] = None

    @property
    def exit_code(self) -> Optional[int]:
        return self.result.exit_code if self.result else None

    @property
    def output(self) -> str:
        return self.result.output if self.result else ""

    def on_complete(self) -> None:
        log.info("shell tool completed", {"success": self.success, "exit": self.exit_code})


class ShellTool:
    """Runs a command and converts failures into diagnostics.

    A non-zero exit code is an Error diagnostic. Failures to start or finish
    the command (missing directory or interpreter, timeout, cancellation) are
    Panic diagnostics.
    """

    def __init__(self, sanitizer: Optional[ShellToolSanitizer] = None):
        self.sanitizer = sanitizer or ShellToolSanitizer()

    def run(self, unsanitized_input: ShellToolInput) -> ShellToolOutput:
        output = ShellToolOutput()
        diagnostics: list[Diagnostic] = []

        try:
            output.input = self.sanitizer.sanitize(unsanitized_input)
        except ToolInputError as e:
            diagnostics.append(Diagnostic(severity=DiagnosticSeverity.ERROR, message=str(e)))
            output.complete(diagnostics)
            return output

        timeout = unsanitized_input.timeout
        if timeout is None:
            timeout = ConfigManager.get().shell.timeout

        try:
            output.result = Shell.execute(output.input, timeout=timeout)
        except (ShellError, OSError) as e:
            log.error("shell tool failed", {"error": e})
            diagnostics.append(
                Diagnostic(
                    severity=DiagnosticSeverity.PANIC,
                    message=format_error(e) or str(e),
                    summary=type(e).__name__,
                )
            )
        else:
            if output.result.exit_code != 0:
                diagnostics.append(
                    Diagnostic(
                        severity=DiagnosticSeverity.ERROR,
                        message=f"Command exited with code {output.result.exit_code}.",
                        summary=output.input.command,
                    )
                )

        output.complete(diagnostics)
        return output
