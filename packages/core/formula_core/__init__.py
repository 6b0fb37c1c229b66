"""Shared settings and logging for the tradier formula installer."""

from .config import FormulaConfig, config_path, load_config
from .logging_setup import JsonFormatter, configure_logging, get_logger, log_dir

__all__ = [
    "FormulaConfig",
    "JsonFormatter",
    "config_path",
    "configure_logging",
    "get_logger",
    "load_config",
    "log_dir",
]
