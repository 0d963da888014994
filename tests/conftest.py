from collections.abc import Iterator
from pathlib import Path

import pytest

from shellrun.core.config import ConfigManager


@pytest.fixture(autouse=True)
def config_context(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    monkeypatch.setenv("SHELLRUN_TEST_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.delenv("SHELLRUN_CONFIG_CONTENT", raising=False)
    token = ConfigManager.provide(ConfigManager())
    try:
        yield
    finally:
        ConfigManager.restore(token)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
