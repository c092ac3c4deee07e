# emi_calculator/core/diagnostics/debug.py
"""
Logging / debug helpers.

- All modules log through `logging.getLogger(__name__)` under the
  "emi_calculator" namespace; nothing is emitted unless a handler is attached.
- `get_debug_logger()` attaches a rotating file handler (logs/emi_calculator.log)
  once debug is enabled via EMI_DEBUG=1 or the CLI --debug flag.
- `print_error()` always echoes to stderr and best-effort logs to file.
"""

from __future__ import annotations

import logging
import os
import sys
import traceback
from logging.handlers import RotatingFileHandler

ROOT_LOGGER_NAME = "emi_calculator"
DEFAULT_LOG_PATH = os.path.join("logs", "emi_calculator.log")

_LOGGER: logging.Logger | None = None

# print_error() writes to stderr itself; records it logs carry this flag so the console handler skips them.
_SKIP_CONSOLE = "emi_skip_console"


def _not_echoed(record: logging.LogRecord) -> bool:
    return not getattr(record, _SKIP_CONSOLE, False)


def debug_enabled() -> bool:
    return os.getenv("EMI_DEBUG", "").strip().lower() in {"1", "true", "yes", "on"}


def get_debug_logger(log_path: str | None = None) -> logging.Logger:
    """Create/reuse the package logger with a rotating file handler at DEBUG level."""
    global _LOGGER
    if _LOGGER is not None:
        return _LOGGER

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # Avoid duplicate handlers if reloaded in REPL/tests
    if not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        path = log_path or os.getenv("EMI_LOG_PATH") or DEFAULT_LOG_PATH
        try:
            directory = os.path.dirname(path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            handler = RotatingFileHandler(path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
            handler.setFormatter(
                logging.Formatter(
                    fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
                    datefmt="(%Y-%m-%d %H:%M:%S)",
                )
            )
            logger.addHandler(handler)
        except OSError:
            # No file log; stderr output from print_error keeps working.
            pass

    _LOGGER = logger
    return logger


def configure_logging(debug: bool | None = None, log_path: str | None = None) -> logging.Logger:
    """
    Package logger setup for CLI runs. Warnings always reach stderr; the DEBUG file
    log is only attached when debug is requested (argument or EMI_DEBUG).
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    consoles = [h for h in logger.handlers if getattr(h, "_emi_console", False)]
    for h in consoles:
        # stderr may have been swapped (tests, embedding) since the handler was created
        h.setStream(sys.stderr)  # type: ignore[attr-defined]
        h.addFilter(_not_echoed)
    if not consoles:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(logging.WARNING)
        console.setFormatter(logging.Formatter("[EMI %(levelname)s] %(message)s"))
        console._emi_console = True  # type: ignore[attr-defined]
        console.addFilter(_not_echoed)
        logger.addHandler(console)
    if logger.level == logging.NOTSET:
        logger.setLevel(logging.INFO)

    if debug is None:
        debug = debug_enabled()
    if debug:
        return get_debug_logger(log_path)
    return logger


def print_error(prefix: str, exc: BaseException, *, with_traceback: bool = False) -> None:
    """Always print errors to stderr and best-effort log them."""
    msg = f"{prefix}: {exc}"
    if with_traceback:
        msg += "\n" + "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    print(f"[EMI ERROR] {msg}", file=sys.stderr, flush=True)

    if _LOGGER is not None and _LOGGER.handlers:
        try:
            _LOGGER.error(msg, extra={_SKIP_CONSOLE: True})
        except Exception:  # noqa: BLE001
            # never break the app from logging issues
            pass
