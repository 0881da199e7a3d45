import unittest
from datetime import timedelta

from knot_downloader.config.durations import format_duration, parse_duration


class ParseDurationTests(unittest.TestCase):
    def test_single_units(self) -> None:
        self.assertEqual(parse_duration("30s"), timedelta(seconds=30))
        self.assertEqual(parse_duration("5m"), timedelta(minutes=5))
        self.assertEqual(parse_duration("2h"), timedelta(hours=2))
        self.assertEqual(parse_duration("1day"), timedelta(days=1))
        self.assertEqual(parse_duration("250ms"), timedelta(milliseconds=250))

    def test_components_are_summed(self) -> None:
        self.assertEqual(parse_duration("1h 30m"), timedelta(minutes=90))
        self.assertEqual(parse_duration("1m30s"), timedelta(seconds=90))

    def test_rejects_bare_numbers_and_unknown_units(self) -> None:
        for value in ("", "10", "5 fortnights", "m5", "1h and 2m"):
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    parse_duration(value)


class FormatDurationTests(unittest.TestCase):
    def test_formats_compound_values(self) -> None:
        self.assertEqual(format_duration(timedelta(minutes=90)), "1h 30m")
        self.assertEqual(format_duration(timedelta(seconds=5)), "5s")
        self.assertEqual(format_duration(timedelta(days=1, seconds=1.5)), "1d 1.5s")


if __name__ == "__main__":
    unittest.main()
