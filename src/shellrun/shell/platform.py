"""Host platform probing used by interpreter resolution.

Kept behind a small protocol so resolution can be exercised against a fake
filesystem and PATH.
"""

from __future__ import annotations

import os
import sys
from typing import Protocol


class Platform(Protocol):
    def is_windows(self) -> bool: ...

    def exists(self, path: str) -> bool: ...

    def path_directories(self) -> list[str]: ...

    def program_files(self) -> str: ...

    def program_files_x86(self) -> str: ...


class HostPlatform:
    """The platform this interpreter is running on."""

    def is_windows(self) -> bool:
        return sys.platform == "win32"

    def exists(self, path: str) -> bool:
        return os.path.isfile(path)

    def path_directories(self) -> list[str]:
        value = os.environ.get("PATH", "")
        separator = ";" if self.is_windows() else os.pathsep
        return [entry for entry in value.split(separator) if entry]

    def program_files(self) -> str:
        return os.environ.get("ProgramFiles", "C:\\Program Files")

    def program_files_x86(self) -> str:
        return os.environ.get("ProgramFiles(x86)", "C:\\Program Files (x86)")
