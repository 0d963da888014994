"""Diagnostics reported by tools."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class DiagnosticSeverity(str, Enum):
    INFO = "Info"
    WARNING = "Warning"
    ERROR = "Error"
    PANIC = "Panic"

    @property
    def is_failure(self) -> bool:
        return self in (DiagnosticSeverity.ERROR, DiagnosticSeverity.PANIC)


class Diagnostic(BaseModel):
    """A single message about a tool run."""

    severity: DiagnosticSeverity
    message: str
    summary: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"[{self.severity.value}] {self.message}"
