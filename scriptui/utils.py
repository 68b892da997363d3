"""Utility functions and logging helpers for scriptui."""

import os
import logging
import sys
import traceback
import inspect
from typing import Optional

LOG_LEVEL_ENV = "SCRIPTUI_LOG_LEVEL"


# Setup logging
def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None,
                  console: bool = True) -> logging.Logger:
    """Setup logging configuration for scriptui."""
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    logger = logging.getLogger("scriptui")
    logger.setLevel(getattr(logging, level.upper()))

    # Clear existing handlers
    logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def setup_runtime_logging(log_file: Optional[str] = None) -> logging.Logger:
    """Setup the runtime logger used for lifecycle tracking."""
    runtime_logger = logging.getLogger("scriptui.runtime")
    runtime_logger.setLevel(logging.DEBUG)
    runtime_logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
    )

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8", mode="w")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.DEBUG)
        runtime_logger.addHandler(file_handler)

    # Console handler for runtime (INFO level only)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.INFO)
    runtime_logger.addHandler(console_handler)

    return runtime_logger


def log_runtime_event(event: str, details: str = "", level: str = "INFO"):
    """Log a runtime event with caller context and details."""
    runtime_logger = logging.getLogger("scriptui.runtime")

    frame = inspect.currentframe().f_back
    if frame:
        filename = os.path.basename(frame.f_code.co_filename)
        context = f"{filename}:{frame.f_lineno}:{frame.f_code.co_name}"
    else:
        context = "unknown"

    message = f"[{context}] {event}"
    if details:
        message += f" - {details}"

    runtime_logger.log(getattr(logging, level.upper(), logging.INFO), message)


def log_exception(e: BaseException, context: str = ""):
    """Log an exception with full traceback."""
    runtime_logger = logging.getLogger("scriptui.runtime")

    runtime_logger.error(f"EXCEPTION in {context}: {type(e).__name__}: {e}")
    tb = "".join(traceback.format_exception(type(e), e, e.__traceback__))
    runtime_logger.error(f"Traceback:\n{tb}")


def get_logger(name: str = "scriptui") -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)


def clamp(val, lo, hi):
    """Clamp a value between low and high bounds."""
    return max(lo, min(hi, val))
