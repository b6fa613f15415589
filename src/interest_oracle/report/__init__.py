from __future__ import annotations

from .formatter import format_rate_table, format_register_table

__all__ = ["format_rate_table", "format_register_table"]
