"""
Client logging module.

This module handles client-side logging functionality.
"""

import logging
import sys

from nebula_common.constants import LOG_FORMAT, LOG_DATE_FORMAT


class ClientLogger:
    """Client logging class."""

    def __init__(self, log_level: int = logging.INFO):
        self.logger = logging.getLogger('nebula_client')
        self.logger.setLevel(log_level)

        # Remove existing handlers
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)

        # Create console handler
        self.console_handler = logging.StreamHandler(sys.stdout)
        self.console_handler.setLevel(log_level)
        self.console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        self.logger.addHandler(self.console_handler)

    def set_level(self, log_level: int):
        """Change the log level."""
        self.logger.setLevel(log_level)
        self.console_handler.setLevel(log_level)

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

    def log_connection(self, uri: str, success: bool):
        """Log connection attempt."""
        status = "Connected" if success else "Failed to connect"
        self.info(f"{status} to {uri}")

    def log_join(self, username: str):
        """Log the join event being sent."""
        self.info(f"Joining as '{username}'")

    def log_chat_sent(self, message: str):
        """Log chat message sent."""
        self.debug(f"Chat sent: {len(message)} chars")

    def show_user_joined(self, username: str):
        """Show user joined notification."""
        self.info(f"[EVENT] User '{username}' joined")

    def show_user_left(self, username: str):
        """Show user left notification."""
        self.info(f"[EVENT] User '{username}' left")

    def log_error(self, operation: str, error: Exception):
        """Log error with operation context."""
        self.error(f"Error in {operation}: {error}")


# Global logger instance
logger = ClientLogger()
