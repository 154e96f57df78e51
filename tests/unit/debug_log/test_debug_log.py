"""Tests for rendering input maps back into directive syntax."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from ttyconf.config import Config, InputMapEntry
from ttyconf.debug_log import (
    format_config,
    format_event,
    format_input_entry,
    format_string_literal,
    write_input_map,
)
from ttyconf.events import Event, Key, Modifier
from ttyconf.lexer import Lexer, literal_bytes
from ttyconf.parser import parse_config


class FormatTests(unittest.TestCase):
    def test_control_bytes_use_ascii_names(self) -> None:
        self.assertEqual(format_string_literal(b"\x1b[B"), '"\\ESC[B"')
        self.assertEqual(format_string_literal(b'a"b\\\x7f'), '"a\\"b\\\\\\DEL"')

    def test_separators_keep_escapes_unambiguous(self) -> None:
        self.assertEqual(format_string_literal(b"\x0eH"), '"\\SO\\&H"')
        self.assertEqual(format_string_literal(b"\xc31"), '"\\195\\&1"')

    def test_rendered_literals_read_back_as_same_bytes(self) -> None:
        samples = [b"", b"\x1b[1;3B", b"\x0eH\x0e", b"\xff9\x80", b"\"'\\", bytes(range(256))]
        for data in samples:
            with self.subTest(data=data):
                text = Lexer(format_string_literal(data)).string_literal()
                self.assertEqual(literal_bytes(text), data)

    def test_event_formatting(self) -> None:
        self.assertEqual(format_event(Event(Key("KUp"))), "KUp []")
        self.assertEqual(
            format_event(Event(Key("KChar", "'"), (Modifier("MCtrl"), Modifier("MAlt")))),
            "KChar '\\'' [MCtrl, MAlt]",
        )
        self.assertEqual(format_event(Event(Key("KFun", 5))), "KFun 5 []")

    def test_entry_formatting(self) -> None:
        self.assertEqual(
            format_input_entry(InputMapEntry(None, b"\x1b[B", Event(Key("KUp")))),
            'map _ "\\ESC[B" KUp []',
        )
        self.assertEqual(
            format_input_entry(InputMapEntry("xterm", b"\x1b[D", Event(Key("KLeft")))),
            'map "xterm" "\\ESC[D" KLeft []',
        )

    def test_formatted_config_parses_back_to_same_map(self) -> None:
        config = Config(
            debug_log="/tmp/café.log",
            input_map=(
                InputMapEntry(None, b"\x1bOP", Event(Key("KFun", 1))),
                InputMapEntry("rxvt", b"\x1b[7~", Event(Key("KHome"), (Modifier("MShift"),))),
                InputMapEntry(None, b"\x01", Event(Key("KChar", "a"), (Modifier("MCtrl"),))),
                InputMapEntry(None, b"\x1b\x7f", Event(Key("KChar", "\x7f"), (Modifier("MMeta"),))),
            ),
            vmin=1,
        )
        reparsed = parse_config(format_config(config))
        self.assertEqual(reparsed.input_map, config.input_map)
        self.assertEqual(reparsed.debug_log, config.debug_log)
        self.assertIsNone(reparsed.vmin)

    def test_scalars_render_as_comments(self) -> None:
        text = format_config(Config(vmin=1, term_name="xterm"))
        self.assertEqual(text, "-- vmin = 1\n-- term_name = 'xterm'\n")


class WriteInputMapTests(unittest.TestCase):
    def test_appends_map_to_debug_log(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "debug.log"
            log_path.write_text("earlier\n", encoding="utf-8")
            config = Config(
                debug_log=str(log_path),
                input_map=(InputMapEntry(None, b"\x1b[B", Event(Key("KUp"))),),
            )
            self.assertTrue(write_input_map(config))
            contents = log_path.read_text(encoding="utf-8")
        self.assertEqual(contents, 'earlier\n-- input map\nmap _ "\\ESC[B" KUp []\n')

    def test_without_debug_log_nothing_is_written(self) -> None:
        self.assertFalse(write_input_map(Config()))

    def test_unwritable_log_is_reported_not_raised(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertLogs("ttyconf.debug_log", level="WARNING"):
                self.assertFalse(write_input_map(Config(debug_log=tmp)))


if __name__ == "__main__":
    unittest.main()
