"""
Shared utilities for FOLIO.

Common functionality used across contexts:
- Session logging
- Timestamps
"""

from folio.utils.timestamp import format_age, now, now_exact

__all__ = ["now", "now_exact", "format_age"]
