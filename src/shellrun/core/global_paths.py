"""Per-user directories for shellrun, resolved through platformdirs."""

import os
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir

APP_NAME = "shellrun"


class GlobalPath:
    """Global path lookups for shellrun directories."""

    @classmethod
    def data(cls) -> str:
        return user_data_dir(APP_NAME)

    @classmethod
    def log(cls) -> str:
        """Log file directory."""
        return str(Path(cls.data()) / "log")

    @classmethod
    def config(cls) -> str:
        """Configuration directory."""
        return os.environ.get("SHELLRUN_TEST_CONFIG_DIR") or user_config_dir(APP_NAME)
