"""Shape-driven value decoding.

A shape declares what to read: a scalar literal, a bracketed list, or an
enumeration described as a table of variant name -> payload shape.
``decode_value`` is the only routine that walks shapes, so adding an
enumeration means declaring a new ``EnumShape`` and nothing else.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Union

from .errors import DecodeError
from .lexer import Lexer

SCALAR_KINDS = ("int", "char", "string")


@dataclass(frozen=True)
class ScalarShape:
    """One literal token: ``int`` (natural), ``char`` or ``string``."""

    kind: str

    def __post_init__(self) -> None:
        if self.kind not in SCALAR_KINDS:
            raise ValueError(f"unknown scalar kind: {self.kind!r}")


@dataclass(frozen=True)
class ListShape:
    """``[`` element ``,`` element ... ``]``; empty lists allowed."""

    element: Shape


@dataclass(frozen=True)
class Variant:
    """One enumeration alternative with at most one payload."""

    name: str
    payload: Shape | None = None


class EnumShape:
    """Closed enumeration decoded by variant name.

    ``build(name, payload)`` turns a matched variant into a domain value.
    Variant names must be unique; duplicates are rejected at construction.
    """

    def __init__(self, name: str, variants: Iterable[Variant], build: Callable[[str, object], object]) -> None:
        self.name = name
        self.build = build
        self._variants: dict[str, Variant] = {}
        for variant in variants:
            if variant.name in self._variants:
                raise ValueError(f"duplicate variant {variant.name!r} in {name}")
            self._variants[variant.name] = variant

    def variant(self, name: str) -> Variant | None:
        return self._variants.get(name)

    @property
    def variant_names(self) -> tuple[str, ...]:
        return tuple(self._variants)

    def __repr__(self) -> str:
        return f"EnumShape({self.name!r}, {len(self._variants)} variants)"


Shape = Union[ScalarShape, ListShape, EnumShape]

INT = ScalarShape("int")
CHAR = ScalarShape("char")
STRING = ScalarShape("string")

_SCALAR_READERS: dict[str, Callable[[Lexer], object]] = {
    "int": Lexer.natural,
    "char": Lexer.char_literal,
    "string": Lexer.string_literal,
}


def decode_value(shape: Shape, lexer: Lexer) -> object:
    """Decode one value of ``shape`` at the lexer cursor.

    Raises ``DecodeError`` when the tokens do not fit the shape and
    ``LexError`` on malformed tokens. The cursor is left wherever decoding
    stopped; callers that backtrack restore ``lexer.pos`` themselves.
    """
    if isinstance(shape, ScalarShape):
        return _SCALAR_READERS[shape.kind](lexer)
    if isinstance(shape, ListShape):
        return _decode_list(shape, lexer)
    if isinstance(shape, EnumShape):
        return _decode_enum(shape, lexer)
    raise TypeError(f"not a shape: {shape!r}")


def _decode_list(shape: ListShape, lexer: Lexer) -> tuple[object, ...]:
    lexer.symbol("[")
    items: list[object] = []
    if lexer.peek_char() != "]":
        items.append(decode_value(shape.element, lexer))
        while lexer.peek_char() == ",":
            lexer.symbol(",")
            items.append(decode_value(shape.element, lexer))
    lexer.symbol("]")
    return tuple(items)


def _decode_enum(shape: EnumShape, lexer: Lexer) -> object:
    start = lexer.pos
    name = lexer.identifier()
    variant = shape.variant(name)
    if variant is None:
        raise lexer.error(f"unknown {shape.name} variant {name!r}", pos=start, cls=DecodeError)
    payload = None if variant.payload is None else decode_value(variant.payload, lexer)
    return shape.build(name, payload)
