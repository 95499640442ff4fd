"""
log_utils.py - Logging setup with icons

Library modules log through ``logging.getLogger(__name__)``; the CLI calls
``setup_logging`` once to attach a message-only handler that prefixes
each line with an icon for its level.
"""

import logging

from quarjar import icons as icon_set


# Message-only; no per-line timestamps
LOG_FORMAT = "%(message)s"


def _level_icon(levelno: int) -> str:
    current = icon_set.icons
    if levelno >= logging.ERROR:
        return current.ERROR
    if levelno >= logging.WARNING:
        return current.WARNING
    if levelno >= logging.INFO:
        return current.INFO
    return current.DEBUG


class IconLogFormatter(logging.Formatter):
    """
    Prefix each message with an icon.

    Pass ``extra={"icon": "SUCCESS"}`` to pick an icon by name from the
    active icon set; otherwise the record's level decides.
    """

    def format(self, record: logging.LogRecord) -> str:
        name = getattr(record, "icon", None)
        icon = getattr(icon_set.icons, name, name) if name else _level_icon(record.levelno)
        base = super().format(record)
        return f"{icon} {base}"


def setup_logging(verbosity: int = 1) -> None:
    """
    Configure root logging.

    verbosity 0 shows warnings and errors only, 1 adds progress
    messages, 2 or more adds debug output.
    """
    level = logging.INFO
    if verbosity <= 0:
        level = logging.WARNING
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler()
    handler.setFormatter(IconLogFormatter(LOG_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    root.addHandler(handler)

    # urllib3 is chatty at DEBUG
    logging.getLogger("urllib3").setLevel(max(level, logging.INFO))
