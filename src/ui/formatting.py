# src/ui/formatting.py

"""Conversions between stored values and what the user types or sees."""

from datetime import datetime, timezone

from src.config.settings import Settings


def format_eta(eta: int) -> str:
    """Render a Unix timestamp as ``YYYY-MM-DD HH:MM`` (UTC)."""
    if eta <= 0:
        return "—"
    return datetime.fromtimestamp(eta, tz=timezone.utc).strftime(
        Settings.ETA_FORMAT
    )


def parse_eta(text: str) -> int:
    """Parse ``YYYY-MM-DD HH:MM`` (UTC) or raw epoch seconds.

    Raises ``ValueError`` when *text* is neither.
    """
    text = text.strip()
    if not text:
        raise ValueError("ETA is empty")
    if text.isdigit():
        return int(text)
    parsed = datetime.strptime(text, Settings.ETA_FORMAT)
    return int(parsed.replace(tzinfo=timezone.utc).timestamp())


def parse_package_spec(spec: str) -> dict[str, object]:
    """Parse ``name:weight:unit:quantity:unit`` into package fields.

    Trailing parts may be omitted. Raises ``ValueError`` on
    non-numeric weight or quantity.
    """
    parts = [part.strip() for part in spec.split(":")]
    parts += [""] * (5 - len(parts))
    name, weight, weight_unit, quantity, quantity_unit = parts[:5]
    return {
        "name": name,
        "weight": float(weight) if weight else 0.0,
        "weight_unit": weight_unit,
        "quantity": int(quantity) if quantity else 0,
        "quantity_unit": quantity_unit,
    }
