"""
Persistence context logger.

Provides logging interface for persistence context with automatic [persist] prefix.
All persistence modules should import from this module, not from utils.logger directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[persist]"


# Wrapper functions with automatic [persist] prefix


def _log_info(message: str) -> None:
    """Log info message with [persist] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [persist] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [persist] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [persist] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [persist] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level persistence-specific logging helpers


def log_save_result(key: str, success: bool, size: int = 0, error: Exception = None) -> None:
    """Log the outcome of a document write."""
    if success:
        _log_debug(f"Saved {size} bytes to '{key}'")
    else:
        _log_error(f"Could not save to '{key}'; keeping in-memory state")
        if error:
            _log_error(f"  Error: {error}")


def log_load_fallback(key: str, reason: str) -> None:
    """Log a load that fell back to the starter document."""
    _log_warning(f"Failed to load saved state from '{key}': {reason}")
