# src/storage/product_store.py

"""In-memory product collection mirrored into local storage."""

import json
import logging
import uuid
from collections.abc import Callable, Mapping
from dataclasses import replace
from typing import Any, cast

from src.config.settings import Settings
from src.models.product import Package, Product
from src.models.status_counts import StatusCounts
from src.storage.local_storage import LocalStorage

logger = logging.getLogger("atrace.store")

Listener = Callable[["ProductStore"], None]


def _coerce_packages(raw: Any) -> list[Package]:
    """Accept Package objects or plain dicts (e.g. straight from a form)."""
    packages: list[Package] = []
    for item in raw or []:
        if isinstance(item, Package):
            packages.append(replace(item))
        elif isinstance(item, dict):
            packages.append(
                Package.from_dict(cast(dict[str, Any], item))
            )
    return packages


def _snapshot(product: Product) -> Product:
    """Detached copy of *product*, packages included."""
    return replace(
        product, packages=[replace(pkg) for pkg in product.packages]
    )


def _check_status(fields: Mapping[str, Any]) -> None:
    status = fields.get("status")
    if status is not None and status not in Settings.STATUSES:
        raise ValueError(
            f"Unknown status {status!r}; expected one of "
            f"{', '.join(Settings.STATUSES)}"
        )


class ProductStore:
    """Ordered product collection with CRUD, paging and status counts.

    Every mutation rewrites the whole collection into
    ``Settings.STORAGE_KEY`` of the given :class:`LocalStorage`.
    Runtime failures never raise: an unknown id makes ``update`` and
    ``delete`` no-ops (they return ``False``), an unavailable storage
    skips persistence, and corrupt stored data is ignored on hydrate.
    """

    def __init__(
        self,
        storage: LocalStorage | None = None,
        storage_key: str | None = None,
    ) -> None:
        self.storage = storage or LocalStorage(None)
        self.storage_key = storage_key or Settings.STORAGE_KEY
        self._products: list[Product] = []
        self._listeners: list[Listener] = []
        self._hydrated = False

    @property
    def products(self) -> list[Product]:
        """Copies of the stored products, in display order."""
        return [_snapshot(p) for p in self._products]

    # ── Observation ──────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* after every change; returns an unsubscriber."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ── Persistence ──────────────────────────────────────

    def hydrate(self, force: bool = False) -> bool:
        """Replace the collection with the persisted one, once.

        Returns ``True`` when a stored collection was loaded.
        """
        if self._hydrated and not force:
            return False
        self._hydrated = True

        if not self.storage.available:
            logger.debug("Storage unavailable; skipping hydrate")
            return False

        raw = self.storage.get_item(self.storage_key)
        if raw is None:
            logger.debug(
                "No stored products under '%s'", self.storage_key
            )
            return False

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning(
                "Stored products under '%s' are not valid JSON: %s",
                self.storage_key,
                exc,
            )
            return False

        if not isinstance(data, list):
            logger.warning(
                "Stored products under '%s' are not a JSON array",
                self.storage_key,
            )
            return False

        products: list[Product] = []
        skipped = 0
        for entry in cast(list[object], data):
            if not isinstance(entry, dict):
                skipped += 1
                continue
            try:
                products.append(
                    Product.from_dict(cast(dict[str, Any], entry))
                )
            except (TypeError, ValueError) as exc:
                logger.debug("Unloadable stored product: %s", exc)
                skipped += 1
        if skipped:
            logger.warning(
                "Skipped %d malformed stored product entries", skipped
            )

        self._products = products
        logger.info(
            "Hydrated %d products from storage", len(self._products)
        )
        self._notify()
        return True

    def _persist(self) -> None:
        """Write the full collection to storage (best effort)."""
        if not self.storage.available:
            logger.debug("Storage unavailable; change kept in memory")
            return
        payload = json.dumps(
            [p.to_dict() for p in self._products], ensure_ascii=False
        )
        try:
            self.storage.set_item(self.storage_key, payload)
        except OSError as exc:
            logger.error(
                "Failed to persist %d products: %s",
                len(self._products),
                exc,
                exc_info=True,
            )

    # ── Queries ──────────────────────────────────────────

    def fetch_page(self, page: int, page_size: int) -> list[Product]:
        """Return the 1-indexed *page* of *page_size* products.

        Pages past the end come back empty rather than raising.
        """
        if page < 1 or page_size < 1:
            return []
        start = (page - 1) * page_size
        return [
            _snapshot(p) for p in self._products[start:start + page_size]
        ]

    def count(self) -> int:
        """Total number of products, regardless of paging."""
        return len(self._products)

    def count_by_status(self) -> StatusCounts:
        """Tally products per status."""
        counts = StatusCounts()
        for p in self._products:
            if p.status == "Pending":
                counts.pending += 1
            elif p.status == "Delivered":
                counts.delivered += 1
            elif p.status == "Cancelled":
                counts.cancelled += 1
        return counts

    def get(self, product_id: str) -> Product | None:
        """Look up a product by id."""
        for p in self._products:
            if p.id == product_id:
                return _snapshot(p)
        return None

    # ── Mutations ────────────────────────────────────────

    def create(self, draft: Product | Mapping[str, Any]) -> Product:
        """Append a new product with a fresh id and persist.

        *draft* carries every field except ``id`` (an ``id`` present
        in it is ignored). A missing or blank ``status`` becomes
        ``Pending``; any other status outside the known set raises
        ``ValueError``. Field contents are not validated here.
        """
        if isinstance(draft, Product):
            fields = draft.field_dict()
        else:
            fields = dict(draft)
        fields.pop("id", None)
        if not fields.get("status"):
            fields["status"] = Settings.DEFAULT_STATUS
        _check_status(fields)
        fields["packages"] = _coerce_packages(fields.get("packages"))

        product = Product(id=str(uuid.uuid4()), **fields)
        self._products.append(product)
        logger.info(
            "Created product %s ('%s')", product.id, product.title
        )

        self._persist()
        self._notify()
        return _snapshot(product)

    def update(
        self, product_id: str, changes: Mapping[str, Any]
    ) -> bool:
        """Shallow-merge *changes* into the product with *product_id*.

        Fields absent from *changes* keep their value and the product
        keeps its position. The collection is persisted whether or not
        the id matched. Returns ``True`` if a product was updated.
        A ``status`` outside the known set raises ``ValueError``.
        """
        fields = dict(changes)
        fields.pop("id", None)
        _check_status(fields)
        if "packages" in fields:
            fields["packages"] = _coerce_packages(fields["packages"])

        updated = False
        for idx, p in enumerate(self._products):
            if p.id == product_id:
                self._products[idx] = replace(p, **fields)
                updated = True
                logger.info(
                    "Updated product %s (%s)",
                    product_id,
                    ", ".join(sorted(fields)) or "no fields",
                )
                break

        if not updated:
            logger.debug("Update skipped; no product %s", product_id)

        self._persist()
        self._notify()
        return updated

    def delete(self, product_id: str) -> bool:
        """Remove the product with *product_id* and persist.

        Returns ``True`` if a product was removed.
        """
        before = len(self._products)
        self._products = [
            p for p in self._products if p.id != product_id
        ]
        removed = len(self._products) < before
        if removed:
            logger.info("Deleted product %s", product_id)
        else:
            logger.debug("Delete skipped; no product %s", product_id)

        self._persist()
        self._notify()
        return removed
