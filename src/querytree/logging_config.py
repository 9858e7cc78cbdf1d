"""
Logging Configuration for querytree.

Provides centralized logger setup for the debug trace log.
The trace logger writes to stderr and, when enabled, to a file in the
auto-detected log directory.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


# Log directory priority:
# 1. QUERYTREE_LOG_DIR (explicit)
# 2. QUERYTREE_PROJECT_ROOT/.querytree (if set)
# 3. CWD/.querytree (fallback)
def _get_log_directory() -> Path:
    """Get the log directory path."""
    log_dir = os.getenv("QUERYTREE_LOG_DIR")
    if not log_dir:
        project_root = os.getenv("QUERYTREE_PROJECT_ROOT")
        if project_root:
            log_dir = str(Path(project_root) / ".querytree")
        else:
            log_dir = str(Path.cwd() / ".querytree")
    return Path(log_dir)


def _ensure_log_directory() -> Path:
    """Ensure log directory exists and return its path."""
    log_dir = _get_log_directory()
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def _file_logging_enabled() -> bool:
    """File logging is opt-in: set QUERYTREE_DEBUG_LOG to any non-empty value."""
    return bool(os.getenv("QUERYTREE_DEBUG_LOG"))


def _stderr_level() -> int:
    """Stderr threshold from QUERYTREE_LOG_LEVEL (default: WARNING)."""
    level_name = os.getenv("QUERYTREE_LOG_LEVEL", "WARNING").upper()
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.WARNING


def _create_file_handler(log_filename: str) -> Optional[logging.FileHandler]:
    """
    Create a file handler for the specified log file.

    Args:
        log_filename: Name of the log file (e.g., 'debug_trace.log')

    Returns:
        Configured FileHandler, or None if file logging is disabled
    """
    if not _file_logging_enabled():
        return None

    try:
        log_dir = _ensure_log_directory()
    except OSError as e:
        print(f"WARNING: Cannot create log directory: {e}", file=sys.stderr)
        return None

    handler = logging.FileHandler(log_dir / log_filename, mode='a', encoding='utf-8')
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


class FlushingStreamHandler(logging.StreamHandler):
    """StreamHandler bound to the current sys.stderr that flushes after every emit."""

    def emit(self, record):
        # sys.stderr may have been swapped since the handler was created
        self.stream = sys.stderr
        super().emit(record)
        self.flush()


def _create_stderr_handler() -> logging.StreamHandler:
    """Create a stderr handler for console output with auto-flush."""
    handler = FlushingStreamHandler()
    handler.setLevel(_stderr_level())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def get_debug_trace_logger() -> logging.Logger:
    """
    Get the debug trace logger for reification and selection.

    Output goes to stderr, and to .querytree/debug_trace.log when
    QUERYTREE_DEBUG_LOG is set.

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger("querytree.debug_trace")

    # Only configure once
    if not logger.handlers:
        logger.setLevel(logging.DEBUG)
        logger.propagate = False  # Don't propagate to root logger

        file_handler = _create_file_handler("debug_trace.log")
        if file_handler:
            logger.addHandler(file_handler)

        logger.addHandler(_create_stderr_handler())

    return logger


def reconfigure_log_directory() -> logging.Logger:
    """
    Rebuild the trace logger handlers.

    Call this after QUERYTREE_PROJECT_ROOT or QUERYTREE_LOG_DIR change,
    e.g. once the CLI has parsed --project.
    """
    logger = logging.getLogger("querytree.debug_trace")
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
    logger = get_debug_trace_logger()

    # Loggers configured earlier hold the old handlers
    for name in _traced_loggers:
        traced = logging.getLogger(name)
        for handler in traced.handlers[:]:
            traced.removeHandler(handler)
        for handler in logger.handlers:
            traced.addHandler(handler)
    return logger


# Names of loggers sharing the trace handlers
_traced_loggers = set()

# Pre-create logger for import convenience
debug_trace_logger = get_debug_trace_logger()


def configure_logger_for_debug_trace(logger_name: str) -> logging.Logger:
    """
    Configure a logger to also write to the debug trace handlers.

    Args:
        logger_name: Name of the logger to configure (e.g., __name__)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(logging.DEBUG)  # Handlers decide what gets through
    for handler in debug_trace_logger.handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)
    _traced_loggers.add(logger_name)
    return logger


def suppress_stderr_logging():
    """
    Suppress stderr logging for the trace logger.

    File logging continues to work normally.
    """
    for handler in logging.getLogger("querytree.debug_trace").handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
            handler.setLevel(logging.CRITICAL + 1)  # Effectively disable


def restore_stderr_logging():
    """
    Restore stderr logging for the trace logger.
    """
    for handler in logging.getLogger("querytree.debug_trace").handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
            handler.setLevel(_stderr_level())


def is_stderr_suppressed() -> bool:
    """True when the trace logger's stderr handler is disabled."""
    for handler in logging.getLogger("querytree.debug_trace").handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
            return handler.level > logging.CRITICAL
    return False
