"""
Session logging for FOLIO commands.

Each command run gets its own log directory holding one file per context
(e.g. ``edit.log``). The file keeps every DEBUG record; the console shows
INFO and above. Context-specific wrappers live in contexts/{context}/logger.py.
"""

import sys
from pathlib import Path

from loguru import logger

import folio

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <7} | {message}"
CONSOLE_FORMAT = "<level>{level: <7}</level> | <level>{message}</level>"


def setup_logger(context_name: str, log_dir: Path, session_details: dict = None) -> Path:
    """
    Route loguru output for one command run.

    Replaces any previously configured sinks, so repeated calls (e.g. several
    CLI invocations in one process) never write to a stale stream.

    Args:
        context_name: Context identifier, used as the log file name
        log_dir: Directory for this session
        session_details: Settings that shaped this run (storage path,
            debounce delay, ...), written to the session header

    Returns:
        Path to the log file
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level="INFO", colorize=True)

    log_session_header(context_name, session_details)
    return log_file


def log_session_header(context_name: str, session_details: dict = None) -> None:
    """Write the FOLIO version, command line and session settings to the log file only."""
    lines = [
        f"FOLIO {folio.__version__} ({context_name})",
        f"Command: {' '.join(sys.argv)}",
    ]
    lines.extend(f"{key}: {value}" for key, value in (session_details or {}).items())

    for line in lines:
        logger.debug(line)
