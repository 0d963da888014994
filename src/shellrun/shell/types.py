"""Request and result models for shell commands."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ShellCommandRequest(BaseModel):
    """A single command to run.

    When ``interpreter`` is set, ``command`` is handed to it verbatim as its
    argument line and ``prefer_powershell`` is ignored. ``prefer_powershell``
    only matters on Windows.
    """

    command: str
    working_directory: Optional[str] = None
    interpreter: Optional[str] = None
    prefer_powershell: bool = True

    model_config = ConfigDict(frozen=True)


class ShellCommandResult(BaseModel):
    """Exit code and merged stdout/stderr of a finished command.

    Every captured line in ``output`` is terminated by ``\\n``. Lines from
    stdout keep their relative order, as do lines from stderr; the order of a
    stdout line relative to a stderr line printed at about the same time is
    not deterministic.

    A process killed by signal N on POSIX reports ``128 + N``, as a shell
    would (137 for SIGKILL).
    """

    exit_code: int
    output: str = ""

    model_config = ConfigDict(frozen=True)

    @property
    def success(self) -> bool:
        return self.exit_code == 0

    def lines(self) -> list[str]:
        return self.output.splitlines()


class Invocation(BaseModel):
    """Executable plus the raw argument line it is launched with.

    ``script`` is the unquoted command when ``arguments`` is a
    ``-c "<script>"`` wrapper built by the resolver, and None when the caller
    supplied the argument line itself.
    """

    executable: str
    arguments: str = Field("", description="Raw argument line, already quoted")
    script: Optional[str] = None

    model_config = ConfigDict(frozen=True)
