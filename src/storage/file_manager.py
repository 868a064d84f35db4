# src/storage/file_manager.py

"""Exports the product collection to files on disk."""

import csv
import json
import logging
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings
from src.models.product import Package, Product
from src.ui.formatting import format_eta

logger = logging.getLogger("atrace.storage")

_COLUMNS: list[str] = [
    "ID",
    "Title",
    "Recipient",
    "Phone",
    "Origin",
    "Destination",
    "ETA",
    "Status",
    "Packages",
]


def _describe_package(pkg: Package) -> str:
    """Compact one-line package summary, e.g. ``Box (2.0 kg x 3 pcs)``."""
    return (
        f"{pkg.name} ({pkg.weight} {pkg.weight_unit}"
        f" x {pkg.quantity} {pkg.quantity_unit})"
    )


def _row(p: Product) -> list[str]:
    return [
        p.id,
        p.title,
        p.recipient,
        p.recipient_phone,
        p.origin,
        p.destination,
        format_eta(p.eta),
        p.status,
        "; ".join(_describe_package(pkg) for pkg in p.packages),
    ]


class FileManager:
    """Handles writing product exports to disk."""

    def __init__(self) -> None:
        self.exports_dir: Path = Settings.EXPORTS_DIR
        self.exports_dir.mkdir(parents=True, exist_ok=True)
        logger.debug("FileManager initialised — exports_dir=%s", self.exports_dir)

    def save_json(self, products: list[Product], label: str) -> Path:
        """Save products to a timestamped JSON file."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = self.exports_dir / f"{label.replace(' ', '_')}_{timestamp}.json"

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(
                [p.to_dict() for p in products],
                f,
                ensure_ascii=False,
                indent=2,
            )

        logger.info("Saved %d products to %s", len(products), filepath)
        return filepath

    def export_csv(self, products: list[Product], label: str) -> Path:
        """Export products to a CSV file in collection order."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = (
            self.exports_dir
            / f"export_{label.replace(' ', '_')}_{timestamp}.csv"
        )

        with open(filepath, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(_COLUMNS)
            for p in products:
                writer.writerow(_row(p))

        logger.info("Exported %d products to %s", len(products), filepath)
        return filepath

    def format_tsv(self, products: list[Product]) -> str:
        """Format products as tab-separated text."""
        lines: list[str] = ["\t".join(_COLUMNS)]
        for p in products:
            lines.append("\t".join(_row(p)))
        return "\n".join(lines)
