from __future__ import annotations

from .transition_checks import TRANSITION_CHECKS

__all__ = ["TRANSITION_CHECKS"]
