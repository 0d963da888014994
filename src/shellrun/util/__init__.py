"""Utility modules."""

from .log import Log

__all__ = ["Log"]

# format_error lives in .error and imports the shell package; import it from
# there to keep util.log importable on its own.
