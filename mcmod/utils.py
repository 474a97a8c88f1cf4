"""
Shared utilities for mcmod.

Provides logging setup, terminal colors, and console input/output helpers.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional


LOGGER_NAME = "mcmod"
LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logging(log_file: Optional[Path] = None, level: str = "INFO") -> logging.Logger:
    """
    Point the mcmod logger at the project log file.

    Console output is printed directly by the commands, so the logger only
    writes to the file. Unknown level names fall back to INFO.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.getLevelName(level.upper()) if level.upper() in LEVELS else logging.INFO)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_file is None:
        logger.addHandler(logging.NullHandler())
        return logger

    try:
        handler = logging.FileHandler(log_file, encoding='utf-8')
    except OSError as e:
        print(f"[mcmod] Warning: Could not create log file: {e}")
        logger.addHandler(logging.NullHandler())
        return logger

    handler.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)-7s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    logger.addHandler(handler)
    return logger


def get_logger() -> logging.Logger:
    """Get the mcmod logger instance."""
    return logging.getLogger(LOGGER_NAME)


class ConsoleIO:
    """Line-oriented terminal input/output used for prompts."""

    def write_line(self, text: str) -> None:
        print(text)

    def prompt(self, text: str) -> Optional[str]:
        """
        Show a prompt and read one line.

        Returns:
            The line without its newline, or None at end of input
        """
        sys.stdout.write(text)
        sys.stdout.flush()
        line = sys.stdin.readline()
        if not line:
            return None
        return line.rstrip('\n')


class Colors:
    """ANSI color codes for terminal output."""
    RED = '\033[91m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RESET = '\033[0m'

    @classmethod
    def enabled(cls) -> bool:
        """Check if colors should be enabled (TTY check)."""
        return os.isatty(1)

    @classmethod
    def wrap(cls, text: str, color: str) -> str:
        """Wrap text in color codes if enabled."""
        if cls.enabled():
            return f"{color}{text}{cls.RESET}"
        return text

    @classmethod
    def error(cls, text: str) -> str:
        return cls.wrap(text, cls.RED)

    @classmethod
    def success(cls, text: str) -> str:
        return cls.wrap(text, cls.GREEN)

    @classmethod
    def warning(cls, text: str) -> str:
        return cls.wrap(text, cls.YELLOW)
