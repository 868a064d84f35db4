# tests/test_formatting.py

"""Tests for ETA and package-spec conversions."""

import unittest

from src.ui.formatting import format_eta, parse_eta, parse_package_spec


class TestEtaFormatting(unittest.TestCase):
    """format_eta / parse_eta."""

    def test_format_known_timestamp(self) -> None:
        """2026-01-01 00:00 UTC."""
        self.assertEqual(format_eta(1_767_225_600), "2026-01-01 00:00")

    def test_format_unset(self) -> None:
        """Zero means no ETA yet."""
        self.assertEqual(format_eta(0), "—")

    def test_parse_datetime_text(self) -> None:
        self.assertEqual(parse_eta("2026-01-01 00:00"), 1_767_225_600)

    def test_parse_epoch_seconds(self) -> None:
        self.assertEqual(parse_eta(" 1767225600 "), 1_767_225_600)

    def test_parse_round_trip(self) -> None:
        """Formatting then parsing keeps minute precision."""
        eta = 1_780_000_020
        self.assertEqual(parse_eta(format_eta(eta)), eta - eta % 60)

    def test_parse_rejects_garbage(self) -> None:
        for text in ("", "tomorrow", "2026-13-01 00:00"):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    parse_eta(text)


class TestPackageSpec(unittest.TestCase):
    """parse_package_spec."""

    def test_full_spec(self) -> None:
        self.assertEqual(
            parse_package_spec("Crate:12.5:kg:2:boxes"),
            {
                "name": "Crate",
                "weight": 12.5,
                "weight_unit": "kg",
                "quantity": 2,
                "quantity_unit": "boxes",
            },
        )

    def test_name_only(self) -> None:
        """Missing trailing parts default to empty/zero."""
        spec = parse_package_spec("Envelope")
        self.assertEqual(spec["name"], "Envelope")
        self.assertEqual(spec["weight"], 0.0)
        self.assertEqual(spec["quantity_unit"], "")

    def test_bad_number(self) -> None:
        with self.assertRaises(ValueError):
            parse_package_spec("Box:heavy")


if __name__ == "__main__":
    unittest.main()
