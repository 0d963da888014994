"""Tool framework and the shell tool."""

from .diagnostic import Diagnostic, DiagnosticSeverity
from .shell import ShellTool, ShellToolInput, ShellToolOutput, ShellToolSanitizer
from .tool import ToolInputError, ToolInputSanitizer, ToolOutput, ToolUnsanitizedInput

__all__ = [
    "Diagnostic",
    "DiagnosticSeverity",
    "ShellTool",
    "ShellToolInput",
    "ShellToolOutput",
    "ShellToolSanitizer",
    "ToolInputError",
    "ToolInputSanitizer",
    "ToolOutput",
    "ToolUnsanitizedInput",
]
