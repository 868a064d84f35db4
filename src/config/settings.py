# src/config/settings.py

"""Central configuration for the aTrace dashboard."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the aTrace dashboard."""

    # --- Storage ---
    STORAGE_KEY: str = "products"       # Local storage slot for the collection

    # --- Dashboard ---
    PAGE_SIZE: int = int(os.getenv("ATRACE_PAGE_SIZE", "5"))
    ETA_FORMAT: str = "%Y-%m-%d %H:%M"

    # --- Domain vocabulary ---
    STATUSES: tuple[str, ...] = ("Pending", "Delivered", "Cancelled")
    DEFAULT_STATUS: str = "Pending"
    WEIGHT_UNITS: tuple[str, ...] = ("kg", "lbs")
    QUANTITY_UNITS: tuple[str, ...] = ("pcs", "boxes")

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    DATA_DIR: Path = Path(
        os.getenv("ATRACE_DATA_DIR", str(BASE_DIR / "data"))
    )
    STORAGE_PATH: Path = DATA_DIR / "local_storage.json"
    EXPORTS_DIR: Path = DATA_DIR / "exports"
    LOGS_DIR: Path = BASE_DIR / "logs"
