"""Merge-law tests: identity, associativity, right bias and map ordering."""

from __future__ import annotations

import dataclasses
import unittest

from ttyconf.config import EMPTY_CONFIG, Config, InputMapEntry, default_config, merge, merge_all
from ttyconf.events import Event, Key, Modifier

UP = InputMapEntry(None, b"\x1b[A", Event(Key("KUp")))
DOWN = InputMapEntry(None, b"\x1b[B", Event(Key("KDown")))
XTERM_LEFT = InputMapEntry("xterm", b"\x1b[D", Event(Key("KLeft"), (Modifier("MAlt"),)))
ANY_LEFT = InputMapEntry(None, b"\x1b[D", Event(Key("KLeft")))

FULL = Config(
    vmin=1,
    vtime=100,
    mouse_mode=True,
    bracketed_paste_mode=False,
    debug_log="/tmp/a.log",
    input_map=(UP,),
    input_fd=0,
    output_fd=1,
    term_name="xterm",
)
PARTIAL = Config(vtime=5, debug_log="/tmp/b.log", input_map=(DOWN, XTERM_LEFT))
OTHER = Config(mouse_mode=False, term_name="vt100", input_map=(ANY_LEFT,))

SCALAR_FIELDS = [f.name for f in dataclasses.fields(Config) if f.name != "input_map"]


class MergeLawTests(unittest.TestCase):
    def test_empty_is_identity_on_both_sides(self) -> None:
        for config in (FULL, PARTIAL, OTHER, EMPTY_CONFIG):
            with self.subTest(config=config):
                self.assertEqual(merge(EMPTY_CONFIG, config), config)
                self.assertEqual(merge(config, EMPTY_CONFIG), config)

    def test_merge_is_associative(self) -> None:
        for a, b, c in ((FULL, PARTIAL, OTHER), (OTHER, FULL, PARTIAL), (PARTIAL, OTHER, FULL)):
            with self.subTest(a=a, b=b, c=c):
                self.assertEqual(merge(merge(a, b), c), merge(a, merge(b, c)))

    def test_scalars_are_right_biased(self) -> None:
        merged = merge(FULL, PARTIAL)
        for name in SCALAR_FIELDS:
            with self.subTest(field=name):
                override = getattr(PARTIAL, name)
                expected = getattr(FULL, name) if override is None else override
                self.assertEqual(getattr(merged, name), expected)

    def test_present_false_overrides_true(self) -> None:
        merged = merge(FULL, OTHER)
        self.assertIs(merged.mouse_mode, False)
        self.assertEqual(merged.term_name, "vt100")
        self.assertIs(merge(OTHER, Config(vmin=3)).mouse_mode, False)

    def test_input_maps_concatenate_in_order(self) -> None:
        self.assertEqual(merge(FULL, PARTIAL).input_map, (UP, DOWN, XTERM_LEFT))
        self.assertEqual(merge(PARTIAL, FULL).input_map, (DOWN, XTERM_LEFT, UP))

    def test_merge_does_not_deduplicate(self) -> None:
        merged = merge(FULL, FULL)
        self.assertEqual(merged.input_map, (UP, UP))

    def test_merge_all_is_left_fold(self) -> None:
        self.assertEqual(merge_all([]), EMPTY_CONFIG)
        self.assertEqual(merge_all([FULL, PARTIAL, OTHER]), merge(merge(FULL, PARTIAL), OTHER))
        self.assertEqual(merge_all(iter([PARTIAL])), PARTIAL)

    def test_merged_method_and_default(self) -> None:
        self.assertEqual(FULL.merged(PARTIAL), merge(FULL, PARTIAL))
        self.assertIs(default_config(), EMPTY_CONFIG)
        self.assertTrue(Config().is_empty())
        self.assertFalse(PARTIAL.is_empty())


class LookupInputTests(unittest.TestCase):
    def test_later_entry_takes_precedence(self) -> None:
        config = merge(Config(input_map=(XTERM_LEFT,)), Config(input_map=(ANY_LEFT,)))
        self.assertEqual(config.lookup_input(b"\x1b[D", "xterm"), ANY_LEFT.event)

    def test_terminal_filter_is_respected(self) -> None:
        config = Config(input_map=(ANY_LEFT, XTERM_LEFT))
        self.assertEqual(config.lookup_input(b"\x1b[D", "xterm"), XTERM_LEFT.event)
        self.assertEqual(config.lookup_input(b"\x1b[D", "vt100"), ANY_LEFT.event)

    def test_defaults_to_own_terminal_name(self) -> None:
        config = Config(term_name="xterm", input_map=(ANY_LEFT, XTERM_LEFT))
        self.assertEqual(config.lookup_input(b"\x1b[D"), XTERM_LEFT.event)

    def test_missing_sequence(self) -> None:
        self.assertIsNone(FULL.lookup_input(b"nope"))


if __name__ == "__main__":
    unittest.main()
