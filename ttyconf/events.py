"""Input event values and their declarative variant catalogs.

``Key`` and ``Modifier`` are plain name/payload records. Which names exist,
and which carry a payload, is declared once in ``KEY_SHAPE`` and
``MODIFIER_SHAPE`` for the shared decoder.
"""

from __future__ import annotations

from dataclasses import dataclass

from .decoder import CHAR, INT, EnumShape, ListShape, Variant


@dataclass(frozen=True)
class Key:
    """One key variant; ``value`` holds the payload of ``KChar``/``KFun``."""

    name: str
    value: str | int | None = None


@dataclass(frozen=True)
class Modifier:
    name: str


@dataclass(frozen=True)
class Event:
    """A key press with modifiers in the order they were written."""

    key: Key
    modifiers: tuple[Modifier, ...] = ()


def _build_key(name: str, payload: object) -> Key:
    return Key(name, payload)  # type: ignore[arg-type]


def _build_modifier(name: str, payload: object) -> Modifier:
    return Modifier(name)


KEY_VARIANTS: tuple[Variant, ...] = (
    Variant("KEsc"),
    Variant("KChar", CHAR),
    Variant("KBS"),
    Variant("KEnter"),
    Variant("KLeft"),
    Variant("KRight"),
    Variant("KUp"),
    Variant("KDown"),
    Variant("KUpLeft"),
    Variant("KUpRight"),
    Variant("KDownLeft"),
    Variant("KDownRight"),
    Variant("KCenter"),
    Variant("KFun", INT),
    Variant("KBackTab"),
    Variant("KPrtScr"),
    Variant("KPause"),
    Variant("KIns"),
    Variant("KHome"),
    Variant("KPageUp"),
    Variant("KDel"),
    Variant("KEnd"),
    Variant("KPageDown"),
    Variant("KBegin"),
    Variant("KMenu"),
)

MODIFIER_VARIANTS: tuple[Variant, ...] = (
    Variant("MShift"),
    Variant("MCtrl"),
    Variant("MMeta"),
    Variant("MAlt"),
)

KEY_SHAPE = EnumShape("Key", KEY_VARIANTS, _build_key)
MODIFIER_SHAPE = EnumShape("Modifier", MODIFIER_VARIANTS, _build_modifier)
MODIFIER_LIST_SHAPE = ListShape(MODIFIER_SHAPE)
