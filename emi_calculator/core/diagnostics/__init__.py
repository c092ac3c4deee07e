# emi_calculator/core/diagnostics/__init__.py
from .debug import ROOT_LOGGER_NAME, configure_logging, debug_enabled, get_debug_logger, print_error

__all__ = [
    "ROOT_LOGGER_NAME",
    "configure_logging",
    "debug_enabled",
    "get_debug_logger",
    "print_error",
]
