"""Centralized logging configuration."""
import logging
import sys
from typing import Any, MutableMapping


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter carrying job and activity fields.

    Bound fields are rendered as a ``[key=value ...]`` prefix and also passed
    through ``extra`` so handlers can read them as record attributes. Field
    names follow the status sink vocabulary (``job``, ``company``,
    ``activity``).
    """

    def __init__(self, logger: logging.Logger, fields: dict[str, Any] | None = None) -> None:
        super().__init__(logger, dict(fields or {}))

    @property
    def fields(self) -> dict[str, Any]:
        return dict(self.extra)

    def bind(self, **fields: Any) -> "ContextLogger":
        """Return a new adapter with additional bound fields."""
        merged = {**self.extra, **fields}
        return ContextLogger(self.logger, merged)

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        if not self.extra:
            return msg, kwargs
        prefix = " ".join(f"{k}={v}" for k, v in self.extra.items() if v is not None)
        kwargs.setdefault("extra", {}).update(self.extra)
        if not prefix:
            return msg, kwargs
        return f"[{prefix}] {msg}", kwargs


def get_logger(name: str) -> ContextLogger:
    """Get an unbound context logger for a module."""
    return ContextLogger(logging.getLogger(name))
