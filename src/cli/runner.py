# src/cli/runner.py

"""Headless CLI commands over the same store the TUI uses."""

import json
import logging
import sys
from typing import Any

from rich.console import Console
from rich.table import Table

from src.config.settings import Settings
from src.filters.product_validator import ProductValidator
from src.models.product import Product
from src.storage.file_manager import FileManager
from src.storage.local_storage import LocalStorage
from src.storage.product_store import ProductStore
from src.ui.formatting import format_eta, parse_eta, parse_package_spec

logger = logging.getLogger("atrace.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def open_store() -> ProductStore:
    """Create the session store on the configured storage file."""
    store = ProductStore(LocalStorage(Settings.STORAGE_PATH))
    store.hydrate()
    return store


def _print_table(products: list[Product], title: str) -> None:
    """Render a Rich table of products to stdout."""
    table = Table(
        title=title,
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Product ID", style="dim", overflow="fold")
    table.add_column("Title", max_width=40)
    table.add_column("Description", max_width=40)
    table.add_column("Status", justify="center")
    table.add_column("ETA", style="green")
    table.add_column("Pkgs", justify="right")

    for p in products:
        table.add_row(
            p.id,
            p.title,
            p.description or "—",
            p.status,
            format_eta(p.eta),
            str(len(p.packages)),
        )

    Console().print(table)


def _collect_changes(
    title: str | None = None,
    recipient: str | None = None,
    phone: str | None = None,
    description: str | None = None,
    origin: str | None = None,
    destination: str | None = None,
    eta: str | None = None,
    status: str | None = None,
    packages: list[str] | None = None,
) -> dict[str, Any]:
    """Turn CLI option values into store fields, skipping unset ones.

    Raises ``ValueError`` on an unparseable ETA or package spec.
    """
    changes: dict[str, Any] = {}
    for name, value in (
        ("title", title),
        ("recipient", recipient),
        ("recipient_phone", phone),
        ("description", description),
        ("origin", origin),
        ("destination", destination),
        ("status", status),
    ):
        if value is not None:
            changes[name] = value.strip()
    if eta is not None:
        changes["eta"] = parse_eta(eta)
    if packages:
        changes["packages"] = [parse_package_spec(p) for p in packages]
    return changes


def run_list(
    store: ProductStore,
    page: int,
    page_size: int,
    output_format: str,
) -> int:
    """Print one page of products."""
    products = store.fetch_page(page, page_size)
    if output_format == "json":
        json.dump(
            [p.to_dict() for p in products],
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")
    else:
        _print_table(products, f"Products — page {page}")
        _err.print(
            f"[dim]{len(products)} shown of {store.count()} total[/dim]"
        )
    return 0


def run_summary(store: ProductStore) -> int:
    """Print total and per-status counts."""
    counts = store.count_by_status()
    table = Table(title="Summary", title_style="bold cyan")
    table.add_column("Total Products", justify="right")
    table.add_column("Pending", justify="right", style="yellow")
    table.add_column("Delivered", justify="right", style="green")
    table.add_column("Cancelled", justify="right", style="red")
    table.add_row(
        str(store.count()),
        str(counts.pending),
        str(counts.delivered),
        str(counts.cancelled),
    )
    Console().print(table)
    return 0


def run_add(store: ProductStore, **options: Any) -> int:
    """Validate and create a product; prints the new id to stdout."""
    try:
        fields = _collect_changes(**options)
    except ValueError as exc:
        _err.print(f"[red]Invalid value: {exc}[/red]")
        return 1

    problems = ProductValidator.validate(fields)
    if problems:
        for problem in problems:
            _err.print(f"[red]{problem}[/red]")
        return 1

    product = store.create(fields)
    _err.print(f"[green]✓ Created '{product.title}'[/green]")
    sys.stdout.write(product.id + "\n")
    return 0


def run_update(
    store: ProductStore, product_id: str, **options: Any
) -> int:
    """Apply a partial update; exit code 1 when the id is unknown."""
    try:
        changes = _collect_changes(**options)
    except ValueError as exc:
        _err.print(f"[red]Invalid value: {exc}[/red]")
        return 1

    if not changes:
        _err.print("[yellow]Nothing to update.[/yellow]")
        return 1

    problems = ProductValidator.validate(changes, editing=True)
    if problems:
        for problem in problems:
            _err.print(f"[red]{problem}[/red]")
        return 1

    if not store.update(product_id, changes):
        _err.print(f"[red]No product with id {product_id}[/red]")
        return 1

    _err.print(
        f"[green]✓ Updated {', '.join(sorted(changes))}[/green]"
    )
    return 0


def run_delete(store: ProductStore, product_id: str) -> int:
    """Delete a product; exit code 1 when the id is unknown."""
    if not store.delete(product_id):
        _err.print(f"[red]No product with id {product_id}[/red]")
        return 1
    _err.print(f"[green]✓ Deleted {product_id}[/green]")
    return 0


def run_export(store: ProductStore, output_format: str) -> int:
    """Write every product to a JSON or CSV file."""
    products = store.products
    if not products:
        _err.print("[yellow]No products to export.[/yellow]")
        return 1

    try:
        file_manager = FileManager()
        if output_format == "csv":
            path = file_manager.export_csv(products, "products")
        else:
            path = file_manager.save_json(products, "products")
    except Exception as exc:
        logger.error("Export failed: %s", exc, exc_info=True)
        _err.print(f"[red]Export failed: {exc}[/red]")
        return 1

    _err.print(f"[dim]Exported {len(products)} products → {path}[/dim]")
    sys.stdout.write(f"{path}\n")
    return 0
