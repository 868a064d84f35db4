# src/filters/product_validator.py

"""Form validation: reject incomplete products before they are saved."""

import logging
from collections.abc import Mapping
from typing import Any

from src.config.settings import Settings
from src.models.product import Package

logger = logging.getLogger("atrace.filters")

_REQUIRED_TEXT: tuple[tuple[str, str], ...] = (
    ("title", "Title"),
    ("recipient", "Recipient"),
    ("origin", "Origin"),
    ("destination", "Destination"),
)


class ProductValidator:
    """Check product form fields before create/update."""

    @staticmethod
    def validate(
        fields: Mapping[str, Any],
        editing: bool = False,
    ) -> list[str]:
        """Return a list of problems; empty means the fields are valid.

        When *editing*, only the fields present are checked so a
        partial update can be validated on its own.
        """
        problems: list[str] = []

        for key, label in _REQUIRED_TEXT:
            if editing and key not in fields:
                continue
            if not str(fields.get(key) or "").strip():
                problems.append(f"{label} is required")

        if not editing or "eta" in fields:
            eta = fields.get("eta")
            if not isinstance(eta, int) or isinstance(eta, bool) or eta <= 0:
                problems.append("ETA must be a date and time")

        if "status" in fields and fields["status"] not in Settings.STATUSES:
            problems.append(
                f"Status must be one of {', '.join(Settings.STATUSES)}"
            )

        for idx, raw in enumerate(fields.get("packages") or [], 1):
            pkg = raw if isinstance(raw, Package) else Package.from_dict(raw)
            if not pkg.name.strip():
                problems.append(f"Package {idx}: name is required")
            if pkg.weight < 0:
                problems.append(f"Package {idx}: weight cannot be negative")
            if pkg.quantity < 0:
                problems.append(
                    f"Package {idx}: quantity cannot be negative"
                )

        if problems:
            logger.debug(
                "Validation found %d problems: %s",
                len(problems),
                "; ".join(problems),
            )
        return problems
