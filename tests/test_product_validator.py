# tests/test_product_validator.py

"""Tests for the ProductValidator form checks."""

import unittest
from typing import Any

from src.filters.product_validator import ProductValidator
from src.models.product import Package


def _valid_fields() -> dict[str, Any]:
    return {
        "title": "Laptops",
        "recipient": "Sam",
        "recipient_phone": "",
        "description": "",
        "origin": "Berlin",
        "destination": "Abu Dhabi",
        "eta": 1_767_225_600,
        "packages": [
            {"name": "Box", "weight": 4.0, "quantity": 2},
        ],
    }


class TestProductValidator(unittest.TestCase):
    """Verify required-field and package checks."""

    def test_valid_fields_pass(self) -> None:
        """A complete form has no problems."""
        self.assertEqual(ProductValidator.validate(_valid_fields()), [])

    def test_optional_fields_may_be_blank(self) -> None:
        """Phone and description are optional."""
        fields = _valid_fields()
        del fields["recipient_phone"]
        del fields["description"]
        self.assertEqual(ProductValidator.validate(fields), [])

    def test_blank_title_rejected(self) -> None:
        """Whitespace-only title counts as missing."""
        fields = _valid_fields()
        fields["title"] = "   "
        self.assertIn(
            "Title is required", ProductValidator.validate(fields)
        )

    def test_all_required_text_reported(self) -> None:
        """Each missing field gets its own message."""
        problems = ProductValidator.validate({"eta": 1})
        for label in ("Title", "Recipient", "Origin", "Destination"):
            with self.subTest(label=label):
                self.assertIn(f"{label} is required", problems)

    def test_missing_eta_rejected(self) -> None:
        """ETA of zero means the user never picked one."""
        fields = _valid_fields()
        fields["eta"] = 0
        self.assertIn(
            "ETA must be a date and time",
            ProductValidator.validate(fields),
        )

    def test_non_int_eta_rejected(self) -> None:
        """ETA must already be converted to epoch seconds."""
        fields = _valid_fields()
        fields["eta"] = "2026-01-01"
        self.assertTrue(ProductValidator.validate(fields))

    def test_unknown_status_rejected(self) -> None:
        """Status outside the closed set is reported."""
        fields = _valid_fields()
        fields["status"] = "Lost"
        problems = ProductValidator.validate(fields)
        self.assertEqual(len(problems), 1)
        self.assertTrue(problems[0].startswith("Status must be one of"))

    def test_known_status_accepted(self) -> None:
        """All three statuses pass."""
        for status in ("Pending", "Delivered", "Cancelled"):
            fields = _valid_fields()
            fields["status"] = status
            with self.subTest(status=status):
                self.assertEqual(ProductValidator.validate(fields), [])

    def test_package_without_name(self) -> None:
        """Package rows need a name."""
        fields = _valid_fields()
        fields["packages"] = [{"name": ""}, {"name": "Ok"}]
        self.assertEqual(
            ProductValidator.validate(fields),
            ["Package 1: name is required"],
        )

    def test_negative_package_numbers(self) -> None:
        """Negative weight and quantity are rejected."""
        fields = _valid_fields()
        fields["packages"] = [Package(name="Box", weight=-1, quantity=-2)]
        problems = ProductValidator.validate(fields)
        self.assertIn("Package 1: weight cannot be negative", problems)
        self.assertIn("Package 1: quantity cannot be negative", problems)

    def test_no_packages_allowed(self) -> None:
        """A product may have zero packages."""
        fields = _valid_fields()
        fields["packages"] = []
        self.assertEqual(ProductValidator.validate(fields), [])

    def test_editing_checks_only_present_fields(self) -> None:
        """Partial updates are validated field by field."""
        self.assertEqual(
            ProductValidator.validate(
                {"status": "Delivered"}, editing=True
            ),
            [],
        )
        self.assertEqual(
            ProductValidator.validate({"title": ""}, editing=True),
            ["Title is required"],
        )


if __name__ == "__main__":
    unittest.main()
