"""
Logging configuration for f2b.

Diagnostics always go to stderr so report output on stdout can be piped.

TTY mode (interactive): colored symbol + message
Non-TTY mode (cron, pipes): timestamp, level and module path
"""

import logging
import os
import sys
from typing import Optional

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

RESET = "\033[0m"

# level name -> (symbol, ANSI color)
LEVEL_STYLES = {
    "TRACE": ("›", "\033[90m"),
    "DEBUG": ("•", "\033[96m"),
    "INFO": ("✓", "\033[92m"),
    "WARNING": ("⚠", "\033[93m"),
    "ERROR": ("✗", "\033[91m"),
    "CRITICAL": ("✗", "\033[91m"),
}


class TTYAwareFormatter(logging.Formatter):
    """Formatter that adapts output to the terminal.

    TTY:
        ✓ Banned 192.0.2.7 in sshd
        ✗ fail2ban-client status failed: ...

    Non-TTY:
        2025-03-02 10:00:00.123 INFO f2b/lib/client.py: Banned 192.0.2.7 in sshd
    """

    default_msec_format = "%s.%03d"

    def __init__(self, is_tty: bool):
        self.is_tty = is_tty
        super().__init__("%(message)s" if is_tty else "%(asctime)s %(levelname)s %(module_path)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        if not self.is_tty:
            record.module_path = record.name.replace(".", "/") + ".py"
            return super().format(record)

        symbol, color = LEVEL_STYLES.get(record.levelname, ("›", ""))
        return f"{color}{symbol}{RESET} {super().format(record)}"


def resolve_level(level: Optional[str]) -> int:
    """Map a level name (or LOG_LEVEL, default WARNING) to its numeric value."""
    name = (level or os.getenv("LOG_LEVEL", "WARNING")).upper()
    if name == "TRACE":
        return TRACE
    return getattr(logging, name, logging.WARNING)


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger with a single stderr handler.

    Args:
        level: TRACE, DEBUG, INFO, WARNING, ERROR or CRITICAL.
               Defaults to the LOG_LEVEL env var, then WARNING.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(TTYAwareFormatter(sys.stderr.isatty()))

    logging.root.setLevel(resolve_level(level))
    logging.root.handlers = [handler]
