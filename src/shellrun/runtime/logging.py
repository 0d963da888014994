"""Runtime logging bootstrap helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.config import ConfigManager
from ..util.log import Log, LogFormat, LogLevel


@dataclass(frozen=True)
class LogSettings:
    level: LogLevel
    format: LogFormat
    console: bool
    file: bool
    dev_file: bool


def _resolve(
    *,
    level: Optional[str],
    format: Optional[str],
    console: Optional[bool],
    file: Optional[bool],
    dev_file: Optional[bool],
) -> LogSettings:
    log = ConfigManager.get().logging

    lv = LogLevel.parse(level or (log.level if log else None))
    fm = LogFormat.parse(format or (log.format if log else None))

    def pick(explicit: Optional[bool], configured: Optional[bool], default: bool) -> bool:
        if explicit is not None:
            return explicit
        if configured is not None:
            return configured
        return default

    return LogSettings(
        level=lv,
        format=fm,
        console=pick(console, log.console if log else None, False),
        file=pick(file, log.file if log else None, True),
        dev_file=pick(dev_file, log.dev_file if log else None, False),
    )


def bootstrap_logging(
    *,
    level: Optional[str] = None,
    format: Optional[str] = None,
    console: Optional[bool] = None,
    file: Optional[bool] = None,
    dev_file: Optional[bool] = None,
) -> LogSettings:
    """Resolve config and initialize the process logger.

    Explicit arguments win over the ``logging`` config section, which wins
    over the defaults (file logging on, console off).
    """
    settings = _resolve(
        level=level,
        format=format,
        console=console,
        file=file,
        dev_file=dev_file,
    )
    Log.configure(
        level=settings.level,
        format=settings.format,
        console=settings.console,
        file=settings.file,
        dev=settings.dev_file,
    )
    return settings
