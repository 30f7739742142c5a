"""
Editing context logger.

Provides logging interface for editing context with automatic [edit] prefix.
All editing modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from folio.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[edit]"


def setup_editing_logger(log_dir: Path, storage_path: Path = None, debounce_ms: int = None) -> Path:
    """
    Setup logger for an editing session.

    Args:
        log_dir: Directory for this editing session
        storage_path: Durable storage location, recorded in the session header
        debounce_ms: Save debounce delay, recorded in the session header

    Returns:
        Path to log file

    Example:
        from folio.contexts.editing.logger import setup_editing_logger, _log_info

        log_file = setup_editing_logger(log_dir, storage_path=Path("outs/storage"), debounce_ms=600)
        _log_info("Opening document...")
    """
    details = {}
    if storage_path is not None:
        details["Storage"] = storage_path
    if debounce_ms is not None:
        details["Save debounce"] = f"{debounce_ms} ms"
    return _setup_logger(context_name="edit", log_dir=log_dir, session_details=details)


# Wrapper functions with automatic [edit] prefix


def _log_info(message: str) -> None:
    """Log info message with [edit] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [edit] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [edit] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [edit] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [edit] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level editing-specific logging helpers


def log_mutation(operation: str, section_count: int, detail: str = "") -> None:
    """Log a committed document mutation."""
    suffix = f" ({detail})" if detail else ""
    _log_debug(f"{operation}{suffix}: {section_count} section(s)")


def log_rejected(operation: str, reason: str) -> None:
    """Log a mutation that was rejected and left the document unchanged."""
    _log_debug(f"{operation} rejected: {reason}")


def log_import_result(source: str, result) -> None:
    """
    Log the outcome of an import.

    Args:
        source: Where the data came from (file name or "<text>")
        result: ImportResult from import_text() or import_file()
    """
    if result.success:
        _log_success(f"Imported {result.section_count} section(s) from {source}")
    else:
        _log_error(f"Import from {source} failed: {result.message}")
