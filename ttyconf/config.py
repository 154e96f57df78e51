"""Configuration record and merge rules.

A ``Config`` is a fragment: every scalar field may be ``None`` (absent) and
the input map is an ordered tuple. Fragments combine with ``merge``, which is
associative and has ``EMPTY_CONFIG`` as its identity.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, fields
from functools import reduce

from .events import Event

DEFAULT_VMIN = 1
DEFAULT_VTIME = 100


@dataclass(frozen=True)
class InputMapEntry:
    """Byte sequence -> event mapping, optionally limited to one terminal type."""

    term: str | None
    data: bytes
    event: Event

    def applies_to(self, term_name: str | None) -> bool:
        return self.term is None or self.term == term_name


@dataclass(frozen=True)
class Config:
    """Terminal configuration; ``None`` means "not specified here".

    ``input_map`` entries later in the tuple take precedence over earlier
    ones with the same bytes. Entries are never deduplicated.
    """

    vmin: int | None = None
    vtime: int | None = None
    mouse_mode: bool | None = None
    bracketed_paste_mode: bool | None = None
    debug_log: str | None = None
    input_map: tuple[InputMapEntry, ...] = ()
    input_fd: int | None = None
    output_fd: int | None = None
    term_name: str | None = None

    def merged(self, override: Config) -> Config:
        return merge(self, override)

    def is_empty(self) -> bool:
        return self == EMPTY_CONFIG

    def lookup_input(self, data: bytes, term_name: str | None = None) -> Event | None:
        """Return the most recently added event for ``data`` on ``term_name``.

        ``term_name`` defaults to this config's own terminal name.
        """
        if term_name is None:
            term_name = self.term_name
        for entry in reversed(self.input_map):
            if entry.data == data and entry.applies_to(term_name):
                return entry.event
        return None


EMPTY_CONFIG = Config()

_SCALAR_FIELDS = tuple(f.name for f in fields(Config) if f.name != "input_map")


def default_config() -> Config:
    """Return the all-absent configuration."""
    return EMPTY_CONFIG


def merge(base: Config, override: Config) -> Config:
    """Combine two fragments; ``override`` wins for every present scalar.

    Input maps concatenate as ``base`` entries followed by ``override`` ones.
    """
    values: dict[str, object] = {}
    for name in _SCALAR_FIELDS:
        value = getattr(override, name)
        values[name] = getattr(base, name) if value is None else value
    return Config(input_map=base.input_map + override.input_map, **values)  # type: ignore[arg-type]


def merge_all(configs: Iterable[Config]) -> Config:
    """Left-fold ``configs`` with ``merge``, starting from ``EMPTY_CONFIG``."""
    return reduce(merge, configs, EMPTY_CONFIG)
