"""Token lexer for the directive language.

Reads identifiers, string/char literals, naturals and list punctuation.
Whitespace, ``--`` line comments and nested ``{- -}`` block comments are
skipped after every token, so callers only ever see significant text.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TypeVar

from .errors import ConfigParseError, DecodeError, LexError

LINE_COMMENT = "--"
BLOCK_COMMENT_START = "{-"
BLOCK_COMMENT_END = "-}"
WHITESPACE_CHARS = frozenset(" \t\n\r\f\v\xa0")
SYMBOL_CHARS = frozenset("[],")
MAX_CODE_POINT = 0x10FFFF
SURROGATES = range(0xD800, 0xE000)
# Literal characters at or below this code point must be written as escapes.
MAX_LITERAL_CONTROL = 26

SIMPLE_ESCAPES: dict[str, int] = {
    "a": 0x07,
    "b": 0x08,
    "f": 0x0C,
    "n": 0x0A,
    "r": 0x0D,
    "t": 0x09,
    "v": 0x0B,
    "\\": 0x5C,
    '"': 0x22,
    "'": 0x27,
}

ASCII_CONTROL_NAMES: tuple[str, ...] = (
    "NUL", "SOH", "STX", "ETX", "EOT", "ENQ", "ACK", "BEL",
    "BS", "HT", "LF", "VT", "FF", "CR", "SO", "SI",
    "DLE", "DC1", "DC2", "DC3", "DC4", "NAK", "SYN", "ETB",
    "CAN", "EM", "SUB", "ESC", "FS", "GS", "RS", "US",
)

ASCII_ESCAPES: dict[str, int] = {name: code for code, name in enumerate(ASCII_CONTROL_NAMES)}
ASCII_ESCAPES["SP"] = 0x20
ASCII_ESCAPES["DEL"] = 0x7F
# Longest names first so ``\SOH`` is never read as ``\SO`` followed by ``H``.
_ASCII_ESCAPES_BY_LENGTH = sorted(ASCII_ESCAPES.items(), key=lambda item: -len(item[0]))

_T = TypeVar("_T")

_DIGITS_BY_BASE = {
    8: frozenset("01234567"),
    10: frozenset("0123456789"),
    16: frozenset("0123456789abcdefABCDEF"),
}


def literal_bytes(text: str) -> bytes:
    """Encode a decoded literal as raw bytes.

    Code points up to ``0xFF`` map to one byte each; larger code points are
    UTF-8 encoded.
    """
    out = bytearray()
    for ch in text:
        code = ord(ch)
        if code <= 0xFF:
            out.append(code)
        else:
            out.extend(ch.encode("utf-8"))
    return bytes(out)


def literal_text(text: str) -> str:
    """Return a decoded literal as text, reading its bytes as UTF-8."""
    return literal_bytes(text).decode("utf-8", errors="surrogateescape")


def _source_bytes(text: str) -> bytes:
    """Encode ``str`` source as UTF-8 so it lexes like the same text read from disk."""
    try:
        return text.encode("utf-8", errors="surrogateescape")
    except UnicodeEncodeError:
        return text.encode("utf-8", errors="surrogatepass")


@dataclass(frozen=True)
class Token:
    """One significant token with its start offset in the source."""

    kind: str
    value: object
    pos: int


class Lexer:
    """Cursor over one configuration buffer.

    ``pos`` is public: parsers save it before an attempt and assign it back to
    backtrack. Every reader skips trailing whitespace and comments.
    """

    def __init__(self, data: bytes | str, name: str = "<config>") -> None:
        if isinstance(data, str):
            data = _source_bytes(data)
        data = bytes(data).decode("latin-1")
        self.text = data
        self.name = name
        self.pos = 0

    def error(self, message: str, pos: int | None = None, cls: type[ConfigParseError] = LexError) -> ConfigParseError:
        """Build an error of type ``cls`` located at ``pos`` (default: cursor)."""
        if pos is None:
            pos = self.pos
        line = self.text.count("\n", 0, pos) + 1
        column = pos - (self.text.rfind("\n", 0, pos) + 1) + 1
        return cls(message, name=self.name, pos=pos, line=line, column=column)

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek_char(self) -> str:
        """Return the character under the cursor, or ``""`` at end of input."""
        if self.pos >= len(self.text):
            return ""
        return self.text[self.pos]

    def skip_whitespace(self) -> None:
        text = self.text
        n = len(text)
        while self.pos < n:
            ch = text[self.pos]
            if ch in WHITESPACE_CHARS:
                self.pos += 1
                continue
            if text.startswith(LINE_COMMENT, self.pos):
                end = text.find("\n", self.pos)
                self.pos = n if end < 0 else end
                continue
            if text.startswith(BLOCK_COMMENT_START, self.pos):
                self._skip_block_comment()
                continue
            break

    def _skip_block_comment(self) -> None:
        """Skip one block comment, including any comments nested inside it."""
        text = self.text
        start = self.pos
        depth = 0
        i = start
        while i < len(text):
            if text.startswith(BLOCK_COMMENT_START, i):
                depth += 1
                i += len(BLOCK_COMMENT_START)
            elif text.startswith(BLOCK_COMMENT_END, i):
                depth -= 1
                i += len(BLOCK_COMMENT_END)
                if depth == 0:
                    self.pos = i
                    return
            else:
                i += 1
        raise self.error("unterminated block comment", pos=start)

    def skip_line(self) -> None:
        """Consume through the next newline, or to end of input."""
        end = self.text.find("\n", self.pos)
        self.pos = len(self.text) if end < 0 else end + 1

    def _lexeme(self, value: _T) -> _T:
        self.skip_whitespace()
        return value

    def identifier(self) -> str:
        text = self.text
        start = self.pos
        ch = self.peek_char()
        if not ch or not (ch.isalpha() or ch == "_"):
            raise self.error("expected identifier", cls=DecodeError)
        end = start + 1
        while end < len(text) and (text[end].isalnum() or text[end] in "_'"):
            end += 1
        self.pos = end
        return self._lexeme(text[start:end])

    def symbol(self, expected: str) -> str:
        if not self.text.startswith(expected, self.pos):
            raise self.error(f"expected {expected!r}", cls=DecodeError)
        self.pos += len(expected)
        return self._lexeme(expected)

    def natural(self) -> int:
        """Read an unsigned decimal, ``0x`` hex or ``0o`` octal integer."""
        ch = self.peek_char()
        if not ch or ch not in _DIGITS_BY_BASE[10]:
            raise self.error("expected natural number", cls=DecodeError)
        if ch == "0" and self.text[self.pos + 1 : self.pos + 2] in {"x", "X", "o", "O"}:
            base = 16 if self.text[self.pos + 1] in "xX" else 8
            self.pos += 2
            return self._lexeme(self._read_number(base))
        return self._lexeme(self._read_number(10))

    def _read_number(self, base: int) -> int:
        digits = _DIGITS_BY_BASE[base]
        start = self.pos
        text = self.text
        while self.pos < len(text) and text[self.pos] in digits:
            self.pos += 1
        if self.pos == start:
            raise self.error(f"expected base-{base} digits")
        try:
            return int(text[start : self.pos], base)
        except ValueError:
            raise self.error("numeric literal too long", pos=start) from None

    def char_literal(self) -> str:
        start = self.pos
        if self.peek_char() != "'":
            raise self.error("expected character literal", cls=DecodeError)
        self.pos += 1
        ch = self.peek_char()
        if ch == "\\":
            self.pos += 1
            value = self._escape_code()
        elif ch and ch != "'" and ord(ch) > MAX_LITERAL_CONTROL:
            self.pos += 1
            value = ch
        else:
            raise self.error("invalid character literal", pos=start)
        if self.peek_char() != "'":
            raise self.error("unterminated character literal", pos=start)
        self.pos += 1
        return self._lexeme(value)

    def string_literal(self) -> str:
        """Read a double-quoted literal and return its decoded code points."""
        start = self.pos
        if self.peek_char() != '"':
            raise self.error("expected string literal", cls=DecodeError)
        self.pos += 1
        out: list[str] = []
        while True:
            ch = self.peek_char()
            if not ch:
                raise self.error("unterminated string literal", pos=start)
            if ch == '"':
                self.pos += 1
                break
            if ch == "\\":
                self.pos += 1
                nxt = self.peek_char()
                if nxt == "&":
                    self.pos += 1
                    continue
                if nxt and nxt in WHITESPACE_CHARS:
                    self._skip_string_gap()
                    continue
                out.append(self._escape_code())
                continue
            if ord(ch) <= MAX_LITERAL_CONTROL:
                raise self.error("unescaped control character in string literal")
            out.append(ch)
            self.pos += 1
        return self._lexeme("".join(out))

    def _skip_string_gap(self) -> None:
        """Skip ``\\<whitespace>\\`` inside a string literal."""
        while self.peek_char() and self.peek_char() in WHITESPACE_CHARS:
            self.pos += 1
        if self.peek_char() != "\\":
            raise self.error("unterminated string gap")
        self.pos += 1

    def _escape_code(self) -> str:
        """Decode one escape; the cursor sits just past the backslash."""
        start = self.pos - 1
        text = self.text
        ch = self.peek_char()
        if not ch:
            raise self.error("unterminated escape sequence", pos=start)
        if ch in SIMPLE_ESCAPES:
            self.pos += 1
            return chr(SIMPLE_ESCAPES[ch])
        if ch in _DIGITS_BY_BASE[10] or ch in {"o", "x"}:
            base = 10
            if ch == "o":
                base = 8
                self.pos += 1
            elif ch == "x":
                base = 16
                self.pos += 1
            code = self._read_number(base)
            if code > MAX_CODE_POINT or code in SURROGATES:
                raise self.error("numeric escape out of range", pos=start)
            return chr(code)
        if ch == "^":
            control = text[self.pos + 1 : self.pos + 2]
            if not control or not ("@" <= control <= "_"):
                raise self.error("invalid control escape", pos=start)
            self.pos += 2
            return chr(ord(control) - ord("@"))
        for name, code in _ASCII_ESCAPES_BY_LENGTH:
            if text.startswith(name, self.pos):
                self.pos += len(name)
                return chr(code)
        raise self.error(f"invalid escape sequence \\{ch}", pos=start)

    def tokenize(self) -> Iterator[Token]:
        """Yield every remaining token; raises ``LexError`` on the first bad one."""
        self.skip_whitespace()
        while not self.at_end():
            pos = self.pos
            ch = self.peek_char()
            if ch == '"':
                yield Token("string", self.string_literal(), pos)
            elif ch == "'":
                yield Token("char", self.char_literal(), pos)
            elif ch in _DIGITS_BY_BASE[10]:
                yield Token("int", self.natural(), pos)
            elif ch.isalpha() or ch == "_":
                yield Token("ident", self.identifier(), pos)
            elif ch in SYMBOL_CHARS:
                yield Token("symbol", self.symbol(ch), pos)
            else:
                raise self.error(f"unexpected character {ch!r}")
