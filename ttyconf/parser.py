"""Directive parser for configuration files.

Recognized directives, tried in order at the start of each statement::

    map _       "\\ESC[B"    KUp   []
    map "xterm" "\\ESC[D"    KLeft [MAlt]
    debugLog "/tmp/tty.log"

Anything else is skipped up to the end of the line. Parsing never fails as a
whole: a bad line only loses that line.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

from .config import EMPTY_CONFIG, Config, InputMapEntry, merge_all
from .decoder import decode_value
from .errors import ConfigParseError, DecodeError
from .events import KEY_SHAPE, MODIFIER_LIST_SHAPE, Event
from .lexer import Lexer, literal_bytes, literal_text

logger = logging.getLogger(__name__)

ANY_TERMINAL = "_"

Directive = Callable[[Lexer], Config]


def _expect_keyword(lexer: Lexer, keyword: str) -> None:
    start = lexer.pos
    name = lexer.identifier()
    if name != keyword:
        raise lexer.error(f"expected {keyword!r}, got {name!r}", pos=start, cls=DecodeError)


def _terminal_filter(lexer: Lexer) -> str | None:
    """``_`` for every terminal, or a string naming one terminal type."""
    if lexer.peek_char() == ANY_TERMINAL:
        lexer.pos += 1
        lexer.skip_whitespace()
        return None
    return literal_text(lexer.string_literal())


def parse_map(lexer: Lexer) -> Config:
    _expect_keyword(lexer, "map")
    term = _terminal_filter(lexer)
    data = literal_bytes(lexer.string_literal())
    key = decode_value(KEY_SHAPE, lexer)
    modifiers = decode_value(MODIFIER_LIST_SHAPE, lexer)
    entry = InputMapEntry(term=term, data=data, event=Event(key, modifiers))  # type: ignore[arg-type]
    return Config(input_map=(entry,))


def parse_debug_log(lexer: Lexer) -> Config:
    _expect_keyword(lexer, "debugLog")
    return Config(debug_log=literal_text(lexer.string_literal()))


DIRECTIVES: tuple[Directive, ...] = (parse_map, parse_debug_log)


def _try_directives(lexer: Lexer) -> Config | None:
    """Run each directive from the current position; first full match wins."""
    start = lexer.pos
    for directive in DIRECTIVES:
        try:
            return directive(lexer)
        except ConfigParseError:
            lexer.pos = start
    return None


def iter_fragments(data: bytes | str, name: str = "<config>") -> Iterator[Config]:
    """Yield one fragment per statement or skipped line, in input order."""
    lexer = Lexer(data, name)
    while True:
        start = lexer.pos
        try:
            lexer.skip_whitespace()
        except ConfigParseError as exc:
            logger.debug("skipping line: %s", exc)
            lexer.pos = start
            lexer.skip_line()
            yield EMPTY_CONFIG
            continue
        if lexer.at_end():
            return
        fragment = _try_directives(lexer)
        if fragment is None:
            line_start = lexer.pos
            lexer.skip_line()
            logger.debug(
                "%s: ignoring unrecognized line %r",
                name,
                lexer.text[line_start : lexer.pos].rstrip("\n"),
            )
            fragment = EMPTY_CONFIG
        yield fragment


def parse_config(data: bytes | str, name: str = "<config>") -> Config:
    """Parse a whole buffer into one merged fragment."""
    return merge_all(iter_fragments(data, name))


def run_parse_config(name: str, data: bytes | str) -> Config:
    """Parse ``data``; any parse failure yields ``EMPTY_CONFIG``."""
    try:
        return parse_config(data, name)
    except ConfigParseError as exc:
        logger.debug("discarding config %s: %s", name, exc)
        return EMPTY_CONFIG
