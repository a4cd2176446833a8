"""Tests for ANSI-aware width measurement and clipping."""

import unittest

from ssmssh import ansi


class AnsiWidthTests(unittest.TestCase):
    def test_escapes_do_not_count_toward_width(self) -> None:
        self.assertEqual(ansi.display_width("\033[1;38;5;39mabc\033[0m"), 3)
        self.assertEqual(ansi.strip_ansi("\033[2mhint\033[0m"), "hint")

    def test_wide_and_combining_characters(self) -> None:
        self.assertEqual(ansi.char_display_width("界"), 2)
        self.assertEqual(ansi.char_display_width("́"), 0)
        self.assertEqual(ansi.display_width("⠋ Loading..."), 12)

    def test_clip_keeps_escape_sequences(self) -> None:
        clipped = ansi.clip_ansi_line("\033[31mabcdef\033[0m", 3)

        self.assertEqual(clipped, "\033[31mabc")
        self.assertEqual(ansi.display_width(clipped), 3)

    def test_clip_never_splits_wide_character(self) -> None:
        self.assertEqual(ansi.clip_ansi_line("a界b", 2), "a")
        self.assertEqual(ansi.clip_ansi_line("abc", 0), "")

    def test_pad_fills_to_exact_width(self) -> None:
        self.assertEqual(ansi.pad_ansi_line("ab", 4), "ab  ")
        self.assertEqual(ansi.pad_ansi_line("abcdef", 4), "abcd")


if __name__ == "__main__":
    unittest.main()
