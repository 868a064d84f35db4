# src/models/status_counts.py

"""Per-status product tally shown in the dashboard summary."""

from dataclasses import dataclass


@dataclass
class StatusCounts:
    """Number of products in each status."""

    pending: int = 0
    delivered: int = 0
    cancelled: int = 0

    @property
    def total(self) -> int:
        return self.pending + self.delivered + self.cancelled
