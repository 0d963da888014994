"""Shared test helpers."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class FakePlatform:
    """Platform with a fixed OS flag, file set and PATH."""

    windows: bool = True
    files: set[str] = field(default_factory=set)
    path: list[str] = field(default_factory=list)
    program_files_dir: str = "C:\\Program Files"
    program_files_x86_dir: str = "C:\\Program Files (x86)"
    checked: list[str] = field(default_factory=list)

    def is_windows(self) -> bool:
        return self.windows

    def exists(self, path: str) -> bool:
        self.checked.append(path)
        return path in self.files

    def path_directories(self) -> list[str]:
        return list(self.path)

    def program_files(self) -> str:
        return self.program_files_dir

    def program_files_x86(self) -> str:
        return self.program_files_x86_dir
