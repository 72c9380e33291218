"""Core utilities: configuration and logging."""
from .config import (
    BrowserConfig,
    ClaudeConfig,
    EasyApplierConfig,
    PathsConfig,
    Settings,
    TailoringConfig,
)
from .logging import ContextLogger, get_logger, setup_logging

__all__ = [
    "Settings",
    "BrowserConfig",
    "ClaudeConfig",
    "EasyApplierConfig",
    "TailoringConfig",
    "PathsConfig",
    "ContextLogger",
    "get_logger",
    "setup_logging",
]
