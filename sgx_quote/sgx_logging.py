# Copyright 2025 Hewlett Packard Enterprise Development LP.
# SPDX-License-Identifier: MIT
#
# Logging utilities - Centralized logging configuration for library and CLI usage.

"""
Logging utilities for sgx_quote

This module provides centralized logging configuration for both library and CLI usage.
The library itself never installs handlers; call setup_logging (or one of the
convenience wrappers) from an application or the CLI.
"""

import logging
import sys
from typing import Optional, Union


class ColoredFormatter(logging.Formatter):
    """Formatter that adds colors to log levels (for CLI mode)."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",  # Reset
    }

    def format(self, record):
        # Color a copy so other handlers still see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        if record.levelname in self.COLORS:
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.COLORS['RESET']}"
        return super().format(record)


def setup_logging(
    name: str = "sgx_quote",
    level: Union[str, int] = logging.INFO,
    cli_mode: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    Set up logging with the specified configuration.

    Args:
        name: Logger name (default: "sgx_quote")
        level: Logging level (default: INFO)
        cli_mode: Whether running in CLI mode (affects formatting)
        verbose: Enable verbose logging (sets level to DEBUG)
        quiet: Enable quiet mode (sets level to WARNING)
        log_file: Optional file path to write logs to
        format_string: Custom format string (if None, uses appropriate default)

    Returns:
        Configured logger instance
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    elif isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    # Configure the root logger so module loggers and __main__ all propagate here
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if format_string is None:
        if cli_mode:
            format_string = "%(name)s - %(levelname)s: %(message)s"
        else:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    if cli_mode:
        formatter = ColoredFormatter(format_string)
    else:
        formatter = logging.Formatter(format_string)

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        # No colors in files
        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
        )
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)

    return logging.getLogger(name)


def get_logger(name: str = "sgx_quote") -> logging.Logger:
    """
    Get a logger instance with the given name.

    Args:
        name: Logger name (default: "sgx_quote")

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def setup_cli_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Convenience function to set up logging for CLI tools.

    Args:
        verbose: Enable verbose logging
        quiet: Enable quiet mode
        log_file: Optional log file path

    Returns:
        Configured logger instance
    """
    return setup_logging(cli_mode=True, verbose=verbose, quiet=quiet, log_file=log_file)


def setup_library_logging(
    level: Union[str, int] = logging.INFO, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Convenience function to set up logging for library usage.

    Args:
        level: Logging level
        log_file: Optional log file path

    Returns:
        Configured logger instance
    """
    return setup_logging(cli_mode=False, level=level, log_file=log_file)


logger = get_logger(__name__)


def log_decode_step(structure: str, offset: int, length: int, details: str = "") -> None:
    """Log that a structure was decoded from [offset, offset + length) (for debugging)."""
    logger.debug(
        f"Decoded {structure} at [{offset}, {offset + length})"
        + (f" - {details}" if details else "")
    )


def log_fields(structure: str, record) -> None:
    """Log every field of a decoded record (for debugging)."""
    logger.debug(f"Fields of {structure}:")
    for field_name, value in vars(record).items():
        if hasattr(value, "hex"):
            logger.debug(f"  {field_name}: {value.hex()}")
        else:
            logger.debug(f"  {field_name}: {value}")
