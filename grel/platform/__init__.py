"""Process execution helpers."""

from grel.platform.process import ProcessError, run

__all__ = ["ProcessError", "run"]
