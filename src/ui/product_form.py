# src/ui/product_form.py

"""Modal add/edit form for a product and its packages."""

import logging
from typing import Any

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Select, Static

from src.config.settings import Settings
from src.filters.product_validator import ProductValidator
from src.models.product import Package, Product
from src.ui.formatting import format_eta, parse_eta

logger = logging.getLogger("atrace.ui")

# (field name, label, input id)
_TEXT_FIELDS: list[tuple[str, str, str]] = [
    ("title", "Title", "f_title"),
    ("recipient", "Recipient", "f_recipient"),
    ("recipient_phone", "Recipient Phone", "f_recipient_phone"),
    ("description", "Description", "f_description"),
    ("origin", "Origin", "f_origin"),
    ("destination", "Destination", "f_destination"),
]


def _unit_select(
    units: tuple[str, ...], current: str, css_class: str
) -> Select[str]:
    options = [(u, u) for u in units]
    if current in units:
        return Select(options, prompt="Unit", value=current, classes=css_class)
    return Select(options, prompt="Unit", classes=css_class)


def _select_text(select: Select[str]) -> str:
    value = select.value
    return value if isinstance(value, str) else ""


class PackageRow(Horizontal):
    """One editable package line inside the form."""

    def __init__(self, package: Package) -> None:
        super().__init__(classes="package_row")
        self.package = package

    def compose(self) -> ComposeResult:
        pkg = self.package
        yield Input(pkg.name, placeholder="Name", classes="pkg_name")
        yield Input(
            str(pkg.weight) if pkg.weight else "",
            placeholder="Weight",
            type="number",
            classes="pkg_weight",
        )
        yield _unit_select(
            Settings.WEIGHT_UNITS, pkg.weight_unit, "pkg_weight_unit"
        )
        yield Input(
            str(pkg.quantity) if pkg.quantity else "",
            placeholder="Quantity",
            type="integer",
            classes="pkg_quantity",
        )
        yield _unit_select(
            Settings.QUANTITY_UNITS, pkg.quantity_unit, "pkg_quantity_unit"
        )
        yield Button("Remove", variant="error", classes="remove_pkg")

    def values(self) -> dict[str, Any]:
        """Current field values, with numbers still coerced by Package."""
        return Package.from_dict({
            "name": self.query_one(".pkg_name", Input).value.strip(),
            "weight": self.query_one(".pkg_weight", Input).value,
            "weight_unit": _select_text(
                self.query_one(".pkg_weight_unit", Select)
            ),
            "quantity": self.query_one(".pkg_quantity", Input).value,
            "quantity_unit": _select_text(
                self.query_one(".pkg_quantity_unit", Select)
            ),
        }).to_dict()


class ProductFormScreen(ModalScreen[dict[str, Any] | None]):
    """Add or edit a product; dismisses with the field dict or ``None``."""

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, product: Product | None = None) -> None:
        super().__init__()
        self.product = product
        self.editing = product is not None

    def compose(self) -> ComposeResult:
        product = self.product or Product()
        heading = "Edit Product" if self.editing else "Add Product"

        with VerticalScroll(id="form"):
            yield Static(heading, id="form_title")
            for name, label, input_id in _TEXT_FIELDS:
                yield Label(label)
                yield Input(str(getattr(product, name)), id=input_id)

            yield Label("ETA (UTC)")
            yield Input(
                format_eta(product.eta) if product.eta else "",
                placeholder="YYYY-MM-DD HH:MM",
                id="f_eta",
            )

            # Status only changes after creation
            if self.editing:
                yield Label("Status")
                yield Select(
                    [(s, s) for s in Settings.STATUSES],
                    value=(
                        product.status
                        if product.status in Settings.STATUSES
                        else Settings.DEFAULT_STATUS
                    ),
                    allow_blank=False,
                    id="f_status",
                )

            yield Label("Packages")
            with Vertical(id="packages"):
                for pkg in product.packages or [Package()]:
                    yield PackageRow(pkg)
            yield Button("Add Package", variant="primary", id="add_pkg_btn")

            with Horizontal(id="form_buttons"):
                yield Button(
                    "Update Product" if self.editing else "Save Product",
                    variant="success",
                    id="save_btn",
                )
                yield Button("Cancel", id="cancel_btn")

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        """Route form button clicks."""
        event.stop()
        if event.button.id == "save_btn":
            self.action_save()
        elif event.button.id == "cancel_btn":
            self.action_cancel()
        elif event.button.id == "add_pkg_btn":
            await self.query_one("#packages", Vertical).mount(
                PackageRow(Package())
            )
        elif event.button.has_class("remove_pkg"):
            row = event.button.parent
            if isinstance(row, PackageRow):
                await row.remove()

    def collect_fields(self) -> dict[str, Any]:
        """Read every widget into a snake_case field dict."""
        fields: dict[str, Any] = {
            name: self.query_one(f"#{input_id}", Input).value.strip()
            for name, _label, input_id in _TEXT_FIELDS
        }

        try:
            fields["eta"] = parse_eta(self.query_one("#f_eta", Input).value)
        except ValueError:
            fields["eta"] = 0

        if self.editing:
            fields["status"] = _select_text(
                self.query_one("#f_status", Select)
            )

        fields["packages"] = [
            row.values() for row in self.query(PackageRow)
        ]
        return fields

    def action_save(self) -> None:
        """Validate and close the form with the collected fields."""
        fields = self.collect_fields()
        problems = ProductValidator.validate(fields)
        if problems:
            self.notify(
                "\n".join(problems),
                title="Cannot save product",
                severity="error",
            )
            return
        self.dismiss(fields)

    def action_cancel(self) -> None:
        """Close the form without saving."""
        self.dismiss(None)
