"""Structured logging utilities for ittool.

This module provides context-aware loggers that attach the component name and
any bound context (transformation, source) to every record, plus the handler
setup used by the command-line tool.
"""

import logging
from typing import Any, Dict, Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "ittool"


class ContextLogger:
    """Logger that automatically includes component and bound context."""

    def __init__(
        self,
        name: str,
        component: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize context logger.

        Args:
            name: Logger name (typically __name__)
            component: Component name for structured logging
            context: Key/value pairs added to every record
        """
        self.logger = logging.getLogger(name)
        self.component = component or name.split(".")[-1]
        self.context = dict(context or {})

    def bind(self, **context: Any) -> "ContextLogger":
        """Return a child logger carrying additional context."""
        merged = dict(self.context)
        merged.update(context)
        return ContextLogger(self.logger.name, self.component, merged)

    def _get_extra(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        combined_extra = {"component": self.component}
        combined_extra.update(self.context)
        if extra:
            combined_extra.update(extra)
        return combined_extra

    def _format(self, message: str, extra: Dict[str, Any]) -> str:
        details = " ".join(
            f"{key}={value}" for key, value in extra.items() if key != "component"
        )
        return f"[{self.component}] {message}" + (f" ({details})" if details else "")

    def _log(
        self,
        level: int,
        message: str,
        extra: Optional[Dict[str, Any]],
        exc_info: bool,
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return
        combined = self._get_extra(extra)
        self.logger.log(
            level,
            self._format(message, combined),
            extra={"ittool": combined},
            exc_info=exc_info,
        )

    def debug(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = False
    ) -> None:
        """Log debug message with context."""
        self._log(logging.DEBUG, message, extra, exc_info)

    def info(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = False
    ) -> None:
        """Log info message with context."""
        self._log(logging.INFO, message, extra, exc_info)

    def warning(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = False
    ) -> None:
        """Log warning message with context."""
        self._log(logging.WARNING, message, extra, exc_info)

    def error(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = False
    ) -> None:
        """Log error message with context."""
        self._log(logging.ERROR, message, extra, exc_info)


def get_logger(
    name: str,
    component: Optional[str] = None,
    **context: Any,
) -> ContextLogger:
    """Get a context-aware logger instance.

    Args:
        name: Logger name (typically __name__)
        component: Component name for structured logging
        **context: Key/value pairs added to every record

    Returns:
        ContextLogger instance
    """
    return ContextLogger(name, component, context)


def configure_logging(level: str = "WARNING", console: Optional[Console] = None) -> None:
    """Send ittool log records to standard error through rich.

    Calling this again replaces the handler installed by a previous call.

    Args:
        level: Logging level name
        console: Console to render on (defaults to a standard error console)
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        if getattr(handler, "_ittool_handler", False):
            root.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        show_time=False,
    )
    handler._ittool_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False
