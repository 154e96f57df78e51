"""Render configurations back into directive syntax.

The debug log receives the active input map as ``map`` lines so a user can
copy corrected entries into their config file. Every rendered literal reads
back to the same bytes through ``ttyconf.lexer``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .config import Config, InputMapEntry
from .events import Event, Key
from .lexer import ASCII_CONTROL_NAMES
from .parser import ANY_TERMINAL

logger = logging.getLogger(__name__)

_DIGIT_BYTES = frozenset(b"0123456789")


def _escape_byte(code: int, quote: str) -> str:
    if code == ord(quote) or code == ord("\\"):
        return "\\" + chr(code)
    if 0x20 <= code < 0x7F:
        return chr(code)
    if code < 0x20:
        return "\\" + ASCII_CONTROL_NAMES[code]
    if code == 0x7F:
        return "\\DEL"
    return f"\\{code}"


def format_string_literal(data: bytes) -> str:
    """Quote ``data`` as a double-quoted literal.

    ``\\&`` separates a numeric escape from a following digit and ``\\SO``
    from a following ``H``.
    """
    out = ['"']
    for i, code in enumerate(data):
        out.append(_escape_byte(code, '"'))
        nxt = data[i + 1] if i + 1 < len(data) else None
        if nxt is None:
            continue
        if code >= 0x80 and nxt in _DIGIT_BYTES:
            out.append("\\&")
        elif code == 0x0E and nxt == ord("H"):
            out.append("\\&")
    out.append('"')
    return "".join(out)


def _format_text(text: str) -> str:
    return format_string_literal(text.encode("utf-8", errors="surrogateescape"))


def format_char_literal(ch: str) -> str:
    code = ord(ch)
    if code <= 0xFF:
        return f"'{_escape_byte(code, chr(39))}'"
    return f"'\\{code}'"


def format_key(key: Key) -> str:
    if key.value is None:
        return key.name
    if isinstance(key.value, str):
        return f"{key.name} {format_char_literal(key.value)}"
    return f"{key.name} {key.value}"


def format_event(event: Event) -> str:
    modifiers = ", ".join(modifier.name for modifier in event.modifiers)
    return f"{format_key(event.key)} [{modifiers}]"


def format_input_entry(entry: InputMapEntry) -> str:
    term = ANY_TERMINAL if entry.term is None else _format_text(entry.term)
    return f"map {term} {format_string_literal(entry.data)} {format_event(entry.event)}"


def format_input_map(entries: Iterable[InputMapEntry]) -> list[str]:
    return [format_input_entry(entry) for entry in entries]


def format_config(config: Config) -> str:
    """Render every present field; scalars without a directive become comments."""
    lines: list[str] = []
    for name in ("vmin", "vtime", "mouse_mode", "bracketed_paste_mode", "input_fd", "output_fd", "term_name"):
        value = getattr(config, name)
        if value is not None:
            lines.append(f"-- {name} = {value!r}")
    if config.debug_log is not None:
        lines.append(f"debugLog {_format_text(config.debug_log)}")
    lines.extend(format_input_map(config.input_map))
    return "".join(line + "\n" for line in lines)


def write_input_map(config: Config) -> bool:
    """Append the input map to ``config.debug_log``.

    Returns whether anything was written. Write failures are logged, not raised.
    """
    if config.debug_log is None:
        return False
    lines = ["-- input map"] + format_input_map(config.input_map)
    try:
        with open(config.debug_log, "a", encoding="utf-8", errors="surrogateescape") as handle:
            handle.write("".join(line + "\n" for line in lines))
    except OSError as exc:
        logger.warning("cannot write debug log %s: %s", config.debug_log, exc)
        return False
    return True
