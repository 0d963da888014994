"""Core infrastructure modules."""

from .global_paths import GlobalPath

__all__ = ["GlobalPath"]

# Config is imported from .config directly; it depends on util.log, which
# itself depends on GlobalPath.
