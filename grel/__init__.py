"""grel - Gitee release automation."""

__version__ = "0.3.0"
