"""
Structured logging for the contractkit SDK.

All SDK loggers live under the ``contractkit`` namespace and stay silent
(NullHandler) until the application opts in with ``configure_logging``.
Context is passed through ``extra=`` and rendered after the message.

Example:
    ```python
    from contractkit.utils.logging import configure_logging, get_logger

    configure_logging(level="DEBUG")
    _logger = get_logger(__name__)
    _logger.info("Listing created", extra={"listing_id": 7})
    ```
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

ROOT_LOGGER_NAME = "contractkit"

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime"}

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


class ContextFormatter(logging.Formatter):
    """Formatter that appends ``extra`` fields as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        }
        if not context:
            return base
        rendered = " ".join(f"{key}={value!r}" for key, value in sorted(context.items()))
        return f"{base} | {rendered}"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the SDK namespace.

    Args:
        name: Module name (usually ``__name__``). Names outside the
            ``contractkit`` namespace are nested under it.

    Returns:
        Configured ``logging.Logger``
    """
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(
    level: Union[int, str] = logging.INFO,
    fmt: str = "%(asctime)s %(levelname)s %(name)s: %(message)s",
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """
    Attach a stream handler with the context formatter to the SDK root logger.

    Calling it again replaces the previously configured handler.
    """
    root = get_logger()
    for existing in list(root.handlers):
        if getattr(existing, "_contractkit_handler", False):
            root.removeHandler(existing)

    handler = handler or logging.StreamHandler()
    handler.setFormatter(ContextFormatter(fmt))
    setattr(handler, "_contractkit_handler", True)
    root.addHandler(handler)
    root.setLevel(level)
    root.disabled = False
    return root


def set_level(level: Union[int, str]) -> None:
    get_logger().setLevel(level)


def disable_logging() -> None:
    get_logger().disabled = True


def enable_debug() -> None:
    configure_logging(level=logging.DEBUG)


class LogContext(logging.LoggerAdapter):
    """
    Logger adapter that binds context to every record.

    Example:
        >>> log = LogContext(get_logger(__name__), {"marketplace": "0xabc..."})
        >>> log.info("Buying listing", extra={"listing_id": 3})
    """

    def __init__(self, logger: logging.Logger, context: Dict[str, Any]) -> None:
        super().__init__(logger, context)

    def process(self, msg: Any, kwargs: Any) -> Any:
        merged = dict(self.extra or {})
        merged.update(kwargs.get("extra") or {})
        kwargs["extra"] = merged
        return msg, kwargs
