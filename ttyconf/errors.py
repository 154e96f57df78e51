"""Exception hierarchy for configuration parsing and loading.

Parse errors stay inside the tolerant parsing path.
``ConfigurationError`` subclasses are the only errors callers must handle.
"""

from __future__ import annotations


class TtyConfError(Exception):
    """Base class for every error raised by ttyconf."""


class ConfigParseError(TtyConfError):
    """A directive attempt failed at a known position in the source text."""

    def __init__(self, message: str, name: str = "<config>", pos: int = 0, line: int = 1, column: int = 1) -> None:
        super().__init__(message)
        self.message = message
        self.name = name
        self.pos = pos
        self.line = line
        self.column = column

    def __str__(self) -> str:
        return f"{self.name}:{self.line}:{self.column}: {self.message}"


class LexError(ConfigParseError):
    """Malformed token: unterminated string/comment or invalid escape."""


class DecodeError(ConfigParseError):
    """Token stream does not match the expected value shape."""


class ConfigurationError(TtyConfError):
    """Fatal configuration problem that prevents terminal setup."""


class MissingTermEnvVarError(ConfigurationError):
    """The ``TERM`` environment variable is not set."""

    def __init__(self, message: str = "TERM environment variable not set") -> None:
        super().__init__(message)
