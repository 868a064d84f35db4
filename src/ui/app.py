# src/ui/app.py

"""Terminal dashboard for tracking products and their shipments."""

import logging
from typing import Any, TypeVar, cast

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.screen import Screen
from textual.widget import Widget
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Static,
)

from src.config.settings import Settings
from src.models.product import Product
from src.storage.file_manager import FileManager
from src.storage.local_storage import LocalStorage
from src.storage.product_store import ProductStore
from src.ui.formatting import format_eta
from src.ui.product_form import ProductFormScreen

logger = logging.getLogger("atrace.ui")

W = TypeVar("W", bound=Widget)

_STATUS_STYLES: dict[str, str] = {
    "Pending": "yellow",
    "Delivered": "bold green",
    "Cancelled": "red",
}


class DashboardApp(App[object]):
    """Terminal dashboard for the aTrace product tracker."""

    CSS_PATH = "styles.css"
    TITLE = "aTrace"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("a", "add_product", "Add"),
        Binding("e", "edit_product", "Edit"),
        Binding("d", "delete_product", "Delete"),
        Binding("n", "next_page", "Next"),
        Binding("p", "prev_page", "Previous"),
        Binding("x", "export", "Export CSV"),
        Binding("c", "copy_id", "Copy ID"),
        Binding("t", "copy_page", "Copy page"),
    ]

    def __init__(self, store: ProductStore | None = None) -> None:
        super().__init__()
        self.store = store or ProductStore(
            LocalStorage(Settings.STORAGE_PATH)
        )
        self.page: int = 1
        self.page_size: int = Settings.PAGE_SIZE
        self.page_products: list[Product] = []
        self._dashboard: Screen[Any] | None = None
        self._unsubscribe = self.store.subscribe(self._on_store_changed)

    def compose(self) -> ComposeResult:
        """Build the widget tree for the dashboard."""
        yield Header()
        yield Container(
            Static("📦 Dashboard", id="title"),

            # Summary boxes
            Horizontal(
                Static(id="summary_total", classes="summary_box"),
                Static(id="summary_pending", classes="summary_box"),
                Static(id="summary_delivered", classes="summary_box"),
                Static(id="summary_cancelled", classes="summary_box"),
                id="summary",
            ),

            Horizontal(
                Button("Add Product", variant="success", id="add_btn"),
                id="toolbar",
            ),

            cast(
                DataTable[str | Text],
                DataTable(
                    id="products_table",
                    zebra_stripes=True,
                    cursor_type="row",
                ),
            ),

            # Pagination controls
            Horizontal(
                Button("Previous", id="prev_btn"),
                Static("Page 1", id="page_label"),
                Button("Next", id="next_btn"),
                id="pager",
            ),
            id="main_container",
        )
        yield Footer()

    def on_mount(self) -> None:
        """Configure the table and load persisted products."""
        self._dashboard = self.screen
        table = self._table()
        table.add_columns(
            "Product ID", "Title", "Description", "Status", "ETA"
        )
        self.store.hydrate()
        self.refresh_view()

    def on_unmount(self) -> None:
        """Stop listening to the store."""
        self._unsubscribe()

    def _on_store_changed(self, _store: ProductStore) -> None:
        if self._dashboard is not None and self.is_running:
            self.refresh_view()

    def _find(self, selector: str, expect_type: type[W]) -> W:
        # Widgets live on the dashboard screen, even while a form is open
        screen = self._dashboard or self.screen
        return screen.query_one(selector, expect_type)

    def _table(self) -> DataTable[str | Text]:
        return cast(
            DataTable[str | Text],
            self._find("#products_table", DataTable),
        )

    # ── Rendering ────────────────────────────────────────

    def refresh_view(self) -> None:
        """Redraw summary counts, the current page and pager state."""
        counts = self.store.count_by_status()
        self._find("#summary_total", Static).update(
            f"Total Products\n{self.store.count()}"
        )
        self._find("#summary_pending", Static).update(
            f"Pending\n{counts.pending}"
        )
        self._find("#summary_delivered", Static).update(
            f"Delivered\n{counts.delivered}"
        )
        self._find("#summary_cancelled", Static).update(
            f"Cancelled\n{counts.cancelled}"
        )

        self.page_products = self.store.fetch_page(
            self.page, self.page_size
        )
        table = self._table()
        table.clear()
        for p in self.page_products:
            table.add_row(
                p.id,
                p.title[:40],
                p.description[:50],
                Text(p.status, style=_STATUS_STYLES.get(p.status, "")),
                format_eta(p.eta),
            )

        self._find("#page_label", Static).update(f"Page {self.page}")
        self._find("#prev_btn", Button).disabled = self.page == 1
        self._find("#next_btn", Button).disabled = (
            len(self.page_products) < self.page_size
        )

    def selected_product(self) -> Product | None:
        """Product under the table cursor on the current page."""
        row = self._table().cursor_row
        if 0 <= row < len(self.page_products):
            return self.page_products[row]
        return None

    # ── Events ───────────────────────────────────────────

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button click events."""
        if event.button.id == "add_btn":
            self.action_add_product()
        elif event.button.id == "prev_btn":
            self.action_prev_page()
        elif event.button.id == "next_btn":
            self.action_next_page()

    def on_data_table_row_selected(
        self, event: DataTable.RowSelected
    ) -> None:
        """Open the edit form for the chosen row."""
        if 0 <= event.cursor_row < len(self.page_products):
            self._open_edit_form(self.page_products[event.cursor_row])

    # ── Actions ──────────────────────────────────────────

    def action_next_page(self) -> None:
        """Advance a page, but only onto a non-empty one."""
        if self.store.fetch_page(self.page + 1, self.page_size):
            self.page += 1
            self.refresh_view()

    def action_prev_page(self) -> None:
        """Go back one page, stopping at the first."""
        self.page = max(self.page - 1, 1)
        self.refresh_view()

    def action_add_product(self) -> None:
        """Open an empty product form."""

        def _created(fields: dict[str, Any] | None) -> None:
            if fields is None:
                return
            product = self.store.create(fields)
            self.notify(f"Created '{product.title}'")

        self.push_screen(ProductFormScreen(), _created)

    def action_edit_product(self) -> None:
        """Open the form pre-filled with the selected product."""
        product = self.selected_product()
        if product is None:
            self.notify("Select a product first", severity="warning")
            return
        self._open_edit_form(product)

    def _open_edit_form(self, product: Product) -> None:
        def _updated(fields: dict[str, Any] | None) -> None:
            if fields is None:
                return
            if self.store.update(product.id, fields):
                self.notify(f"Updated '{fields.get('title', '')}'")
            else:
                self.notify(
                    "Product no longer exists", severity="warning"
                )

        self.push_screen(ProductFormScreen(product), _updated)

    def action_delete_product(self) -> None:
        """Delete the selected product."""
        product = self.selected_product()
        if product is None:
            self.notify("Select a product first", severity="warning")
            return

        # Last row on a later page: step back before it disappears
        if self.page > 1 and len(self.page_products) == 1:
            self.page -= 1

        self.store.delete(product.id)
        self.notify(f"Deleted '{product.title}'")

    def action_export(self) -> None:
        """Export all products to a CSV file."""
        products = self.store.products
        if not products:
            self.notify("No products to export", severity="warning")
            return
        try:
            path = FileManager().export_csv(products, "products")
            logger.info("Exported products to %s", path)
            self.notify(f"Exported to {path}")
        except Exception as e:
            logger.error("Failed to export products", exc_info=True)
            self.notify(f"Export failed: {e}", severity="error")

    def action_copy_id(self) -> None:
        """Copy the selected product's id to the clipboard."""
        product = self.selected_product()
        if product is None:
            self.notify("Select a product first", severity="warning")
            return
        try:
            import pyperclip  # type: ignore[import-untyped]

            pyperclip.copy(product.id)
            self.notify("Product ID copied")
        except Exception:
            logger.error(
                "Failed to copy product id to clipboard",
                exc_info=True,
            )
            self.notify(
                "Clipboard unavailable (install pyperclip)",
                severity="warning",
            )

    def action_copy_page(self) -> None:
        """Copy the visible page to the clipboard as TSV."""
        if not self.page_products:
            self.notify("No products on this page", severity="warning")
            return
        try:
            import pyperclip  # type: ignore[import-untyped]

            pyperclip.copy(FileManager().format_tsv(self.page_products))
            self.notify(f"Copied {len(self.page_products)} products")
        except Exception:
            logger.error("Failed to copy page to clipboard", exc_info=True)
            self.notify(
                "Clipboard unavailable (install pyperclip)",
                severity="warning",
            )
