from __future__ import annotations

from .utilization import compute_utilization, utilization_from_snapshot

__all__ = [
    "compute_utilization",
    "utilization_from_snapshot",
]
