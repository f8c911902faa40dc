"""
Server logging module.

This module handles server-side logging functionality.
"""

import logging
from pathlib import Path
from typing import Optional

from nebula_common.constants import LOG_FORMAT, LOG_DATE_FORMAT


class ServerLogger:
    """Server logging class."""

    def __init__(self, log_level: int = logging.INFO):
        # Set up main logger
        self.logger = logging.getLogger('nebula_server')
        self.logger.setLevel(log_level)

        # Remove existing handlers
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)

        self.formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

        # Create console handler
        self.console_handler = logging.StreamHandler()
        self.console_handler.setLevel(log_level)
        self.console_handler.setFormatter(self.formatter)
        self.logger.addHandler(self.console_handler)

        self.file_handler: Optional[logging.FileHandler] = None

    def configure(self, log_level: int = logging.INFO, log_file: Optional[str] = None):
        """Change the log level and optionally mirror output to a file."""
        self.logger.setLevel(log_level)
        self.console_handler.setLevel(log_level)

        if self.file_handler is not None:
            self.logger.removeHandler(self.file_handler)
            self.file_handler.close()
            self.file_handler = None

        if log_file:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            self.file_handler = logging.FileHandler(log_file, encoding='utf-8')
            self.file_handler.setLevel(log_level)
            self.file_handler.setFormatter(self.formatter)
            self.logger.addHandler(self.file_handler)

    def info(self, message: str):
        """Log info message."""
        self.logger.info(message)

    def error(self, message: str):
        """Log error message."""
        self.logger.error(message)

    def warning(self, message: str):
        """Log warning message."""
        self.logger.warning(message)

    def debug(self, message: str):
        """Log debug message."""
        self.logger.debug(message)

    def log_connection(self, addr, connection_id: str):
        """Log client connection."""
        self.info(f"New connection from {addr}, assigned id={connection_id}")

    def log_join(self, name: str, connection_id: str):
        """Log a completed join."""
        self.info(f"User '{name}' joined with id={connection_id}")

    def log_rejoin_ignored(self, name: str, connection_id: str, attempted: object):
        """Log a second join on an already-named connection."""
        self.warning(f"Ignoring repeated join from '{name}' (id={connection_id}), attempted name {attempted!r}")

    def log_disconnect(self, name: Optional[str], connection_id: str):
        """Log client disconnect."""
        if name is None:
            self.info(f"Anonymous connection id={connection_id} closed")
        else:
            self.info(f"User {name} (id={connection_id}) disconnected")

    def log_chat(self, name: str, connection_id: str, body: str):
        """Log a relayed chat message without its content."""
        self.info(f"Chat from {name} (id={connection_id}): {len(body)} chars")

    def log_static(self, path: str, status: int):
        """Log a static asset request."""
        self.debug(f"GET {path} -> {status}")

    def log_error(self, operation: str, error: Exception):
        """Log error with operation context."""
        self.error(f"Error in {operation}: {error}")


# Global logger instance
logger = ServerLogger()
