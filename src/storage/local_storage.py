# src/storage/local_storage.py

"""File-backed key/value storage with the browser ``localStorage`` API."""

import json
import logging
from pathlib import Path
from typing import cast

logger = logging.getLogger("atrace.storage")


class LocalStorage:
    """String key/value slots kept in a single JSON file.

    A storage created with ``path=None`` is *unavailable*: reads return
    ``None`` and writes are dropped, the way a store running outside a
    browser has no ``localStorage`` to talk to.
    """

    def __init__(self, path: Path | None) -> None:
        self.path = path
        if path is not None:
            logger.debug("LocalStorage bound to %s", path)

    @property
    def available(self) -> bool:
        """Whether a backing file is configured."""
        return self.path is not None

    # ── Reading ──────────────────────────────────────────

    def _read_all(self) -> dict[str, str]:
        if self.path is None or not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning(
                "Ignoring unreadable storage file %s: %s",
                self.path,
                exc,
            )
            return {}

        if not isinstance(data, dict):
            logger.warning(
                "Storage file %s does not hold an object; ignoring",
                self.path,
            )
            return {}

        slots = cast(dict[str, object], data)
        return {
            k: v for k, v in slots.items() if isinstance(v, str)
        }

    def get_item(self, key: str) -> str | None:
        """Return the value stored under *key*, or ``None``."""
        return self._read_all().get(key)

    # ── Writing ──────────────────────────────────────────

    def _write_all(self, path: Path, slots: dict[str, str]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(slots, f, ensure_ascii=False, indent=2)

    def set_item(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value.

        Raises ``OSError`` if the file cannot be written.
        """
        if self.path is None:
            return
        slots = self._read_all()
        slots[key] = value
        self._write_all(self.path, slots)
        logger.debug(
            "Wrote %d chars to storage key '%s'", len(value), key
        )

