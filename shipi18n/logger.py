#!/usr/bin/env python3
"""
Colored logging for the shipi18n CLI.

Human-readable progress goes to stderr through the "shipi18n" logger;
stdout is kept for the JSON result of each command.
"""

import logging
import sys

from colorama import Fore, Style, just_fix_windows_console

from .errors import APIError, Shipi18nError

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

logger = logging.getLogger("shipi18n")


class ColoredFormatter(logging.Formatter):
    """Prefix each record with a colored status symbol."""

    FORMATS = {
        logging.DEBUG: Style.DIM + "· %(message)s" + Style.RESET_ALL,
        logging.INFO: Fore.BLUE + "ℹ" + Style.RESET_ALL + " %(message)s",
        SUCCESS: Fore.GREEN + "✓" + Style.RESET_ALL + " %(message)s",
        logging.WARNING: Fore.YELLOW + "⚠" + Style.RESET_ALL + " %(message)s",
        logging.ERROR: Fore.RED + "✗" + Style.RESET_ALL + " %(message)s",
        logging.CRITICAL: Fore.RED + Style.BRIGHT + "✗ %(message)s" + Style.RESET_ALL,
    }

    def format(self, record):
        log_fmt = self.FORMATS.get(record.levelno, "%(message)s")
        formatter = logging.Formatter(log_fmt)
        return formatter.format(record)


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Attach a colored stderr handler to the shipi18n logger.

    Calling it again replaces the previous handler instead of adding another.

    Args:
        verbose: Show debug records

    Returns:
        The configured logger
    """
    just_fix_windows_console()

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(ColoredFormatter())
    logger.addHandler(console_handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    return logger


def success(message: str, *args) -> None:
    """Log at SUCCESS level."""
    logger.log(SUCCESS, message, *args)


def format_error(error: Exception) -> str:
    """
    Build the user-facing explanation for an error, with a hint when one helps.

    Args:
        error: Any exception raised during a command

    Returns:
        Message text, followed by a hint line for known failure kinds
    """
    message = str(error)

    if isinstance(error, APIError) and error.code == "NETWORK_ERROR":
        return "Network error: Could not connect to Shipi18n API"

    if "Language limit exceeded" in message:
        return message + "\n" + "Upgrade your plan at https://shipi18n.com to translate to more languages"

    if "API key" in message:
        return message + "\n" + "Get your free API key at https://shipi18n.com or run: shipi18n config set apiKey YOUR_KEY"

    if isinstance(error, Shipi18nError) and error.suggestion:
        return message + "\n" + error.suggestion

    return message
