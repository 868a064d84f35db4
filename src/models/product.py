# src/models/product.py

"""Product and package records tracked by the dashboard."""

import math
from dataclasses import asdict, dataclass, field
from typing import Any

from src.config.settings import Settings


def _to_float(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _to_int(value: Any) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


@dataclass
class Package:
    """A physical parcel belonging to a product."""

    name: str = ""
    weight: float = 0.0
    weight_unit: str = ""
    quantity: int = 0
    quantity_unit: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialise using the camelCase keys of the stored format."""
        return {
            "name": self.name,
            "weight": self.weight,
            "weightUnit": self.weight_unit,
            "quantity": self.quantity,
            "quantityUnit": self.quantity_unit,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Package":
        """Build a package from a stored or form-supplied dict.

        Accepts both camelCase (stored) and snake_case (Python) keys.
        Numeric fields arriving as strings are coerced; anything that
        does not parse becomes zero.
        """
        return cls(
            name=str(data.get("name", "")),
            weight=_to_float(data.get("weight", 0)),
            weight_unit=str(
                data.get("weightUnit", data.get("weight_unit", ""))
            ),
            quantity=_to_int(data.get("quantity", 0)),
            quantity_unit=str(
                data.get("quantityUnit", data.get("quantity_unit", ""))
            ),
        )


@dataclass
class Product:
    """A shipment record with metadata and zero or more packages."""

    id: str = ""
    title: str = ""
    recipient: str = ""
    recipient_phone: str = ""
    description: str = ""
    origin: str = ""
    destination: str = ""
    eta: int = 0
    status: str = Settings.DEFAULT_STATUS
    packages: list[Package] = field(
        default_factory=lambda: list[Package]()
    )

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the JSON shape kept in local storage."""
        return {
            "id": self.id,
            "title": self.title,
            "recipient": self.recipient,
            "recipientPhone": self.recipient_phone,
            "description": self.description,
            "origin": self.origin,
            "destination": self.destination,
            "eta": self.eta,
            "status": self.status,
            "packages": [p.to_dict() for p in self.packages],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Product":
        """Inverse of :meth:`to_dict`; tolerant of missing keys.

        Unknown statuses load as ``Pending``. A ``packages`` value that
        is not a list loads as no packages.
        """
        raw_packages = data.get("packages")
        if not isinstance(raw_packages, list):
            raw_packages = []
        status = data.get("status")
        if status not in Settings.STATUSES:
            status = Settings.DEFAULT_STATUS
        return cls(
            id=str(data.get("id", "")),
            title=str(data.get("title", "")),
            recipient=str(data.get("recipient", "")),
            recipient_phone=str(
                data.get(
                    "recipientPhone", data.get("recipient_phone", "")
                )
            ),
            description=str(data.get("description", "")),
            origin=str(data.get("origin", "")),
            destination=str(data.get("destination", "")),
            eta=_to_int(data.get("eta", 0)),
            status=str(status),
            packages=[
                Package.from_dict(p)
                for p in raw_packages
                if isinstance(p, dict)
            ],
        )

    def field_dict(self) -> dict[str, Any]:
        """Return snake_case fields, as accepted by the store."""
        return asdict(self)
