"""shellrun - run shell commands and capture their output.

Resolves the interpreter for the host platform (bash, PowerShell or Git Bash
on Windows), runs the command, and returns its exit code with the merged
stdout and stderr text.
"""

__version__ = "0.1.0"


# Lazy imports keep `import shellrun` cheap
def __getattr__(name: str):
    """Lazy import module components."""
    if name in (
        "Shell",
        "ShellCommandRequest",
        "ShellCommandResult",
        "CancelToken",
        "ShellError",
        "ShellNotFoundError",
        "WorkingDirectoryNotFoundError",
        "CommandCancelledError",
        "CommandTimeoutError",
    ):
        from . import shell
        return getattr(shell, name)
    if name == "run":
        from .shell import Shell
        return Shell.run
    if name in ("ShellTool", "ToolOutput", "Diagnostic", "DiagnosticSeverity"):
        from . import tool
        return getattr(tool, name)
    if name == "Log":
        from .util.log import Log
        return Log
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "__version__",
    "run",
    "Shell",
    "ShellCommandRequest",
    "ShellCommandResult",
    "CancelToken",
    "ShellError",
    "ShellNotFoundError",
    "WorkingDirectoryNotFoundError",
    "CommandCancelledError",
    "CommandTimeoutError",
    "ShellTool",
    "ToolOutput",
    "Diagnostic",
    "DiagnosticSeverity",
    "Log",
]
