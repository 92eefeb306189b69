"""Logging configuration helpers."""

import logging

LOGGER_NAME = "photo_album"


class _RequestContextFormatter(logging.Formatter):
    """Appends the object key passed through ``extra=`` when present."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        object_key = getattr(record, "object_key", None)
        if object_key is None:
            return message
        return f"{message} [object_key={object_key}]"


def configure_logging(level: str = "INFO") -> None:
    """Configure the gateway logger with a single stream handler.

    ``level`` is a standard level name such as ``DEBUG`` or ``warning``. It is
    applied on every call so a rebuilt app picks up a changed setting, while
    the handler is only installed once.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        _RequestContextFormatter("%(levelname)s: %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
