"""Output abstraction layer."""

from .console import (
    ConsoleProtocol,
    MockConsole,
    QuietConsole,
    RichConsole,
    Style,
)
from .messages import Messages, load_messages, localize

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "QuietConsole",
    "RichConsole",
    "Style",
    "Messages",
    "load_messages",
    "localize",
]
