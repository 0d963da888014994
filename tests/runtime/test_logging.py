from __future__ import annotations

import json

import pytest

from shellrun.runtime.logging import bootstrap_logging
from shellrun.util.log import LogFormat, LogLevel


@pytest.fixture
def seen(monkeypatch: pytest.MonkeyPatch) -> dict[str, object]:
    captured: dict[str, object] = {}

    def fake_configure(cls, *, level, format, console, file, dev) -> None:  # type: ignore[no-untyped-def]
        captured.update(level=level, format=format, console=console, file=file, dev=dev)

    monkeypatch.setattr("shellrun.runtime.logging.Log.configure", classmethod(fake_configure))
    return captured


def test_bootstrap_logging_defaults(seen: dict[str, object]) -> None:
    settings = bootstrap_logging()

    assert settings.level == LogLevel.INFO
    assert settings.format == LogFormat.KV
    assert settings.console is False
    assert settings.file is True
    assert seen["dev"] is False


def test_bootstrap_logging_prefers_logging_config(
    monkeypatch: pytest.MonkeyPatch,
    seen: dict[str, object],
) -> None:
    monkeypatch.setenv(
        "SHELLRUN_CONFIG_CONTENT",
        json.dumps({"logging": {"level": "debug", "format": "json", "console": True, "file": False, "devFile": True}}),
    )

    settings = bootstrap_logging()

    assert settings.level == LogLevel.DEBUG
    assert settings.format == LogFormat.JSON
    assert settings.console is True
    assert settings.file is False
    assert seen["dev"] is True


def test_bootstrap_logging_arguments_win(
    monkeypatch: pytest.MonkeyPatch,
    seen: dict[str, object],
) -> None:
    monkeypatch.setenv("SHELLRUN_CONFIG_CONTENT", json.dumps({"logging": {"console": True}}))

    settings = bootstrap_logging(level="error", console=False)

    assert settings.level == LogLevel.ERROR
    assert seen["console"] is False
