"""Tool input and output framework.

A tool takes an unsanitized input, sanitizes it into a concrete input, runs,
and reports the outcome as a ``ToolOutput`` holding the input and the
diagnostics collected along the way.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Iterable, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

from .diagnostic import Diagnostic

UnsanitizedT = TypeVar("UnsanitizedT")
InputT = TypeVar("InputT")


class ToolInputError(ValueError):
    """Raised by a sanitizer when the input cannot be used."""


class ToolUnsanitizedInput(BaseModel):
    """Input as given by the user, before validation.

    ``working_directory`` of None means the current directory.
    """

    working_directory: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class ToolInputSanitizer(ABC, Generic[UnsanitizedT, InputT]):
    """Validates and normalizes unsanitized input."""

    @abstractmethod
    def sanitize(self, unsanitized_input: UnsanitizedT) -> InputT:
        """Return the concrete input or raise ``ToolInputError``."""
        raise NotImplementedError


class ToolOutput(ABC, Generic[InputT]):
    """Outcome of a tool run.

    ``success`` is derived once ``complete`` is called: it is False when no
    input was produced, False when any diagnostic is an Error or Panic, and
    True otherwise. Info and Warning diagnostics never affect it.
    """

    def __init__(self) -> None:
        self.input: Optional[InputT] = None
        self.diagnostics: tuple[Diagnostic, ...] = ()
        self.success = False

    def complete(self, diagnostics: Iterable[Diagnostic]) -> None:
        self.diagnostics = tuple(diagnostics)

        if self.input is not None:
            self.success = not any(d.severity.is_failure for d in self.diagnostics)
            self.on_complete()
        else:
            self.success = False

    @abstractmethod
    def on_complete(self) -> None:
        """Hook run after a successful sanitization once diagnostics are in."""
        raise NotImplementedError
