"""
Client configuration module.

This module handles client-side configuration settings.
"""

import os

from nebula_common.constants import (
    DEFAULT_HOST, DEFAULT_PORT, DEFAULT_WS_PATH, CONNECT_TIMEOUT, TYPING_TIMEOUT_MS
)


class ClientConfig:
    """Client configuration class."""

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT,
                 username: str = None, ws_path: str = DEFAULT_WS_PATH):
        self.host = host
        self.port = port
        self.username = username
        self.ws_path = ws_path

        # Connection settings
        self.connect_timeout = CONNECT_TIMEOUT

        # Typing indicator settings
        self.typing_timeout_ms = TYPING_TIMEOUT_MS

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build a config from NEBULA_SERVER_* environment variables."""
        return cls(
            host=os.environ.get('NEBULA_SERVER_HOST', DEFAULT_HOST),
            port=int(os.environ.get('NEBULA_SERVER_PORT', str(DEFAULT_PORT))),
        )

    @property
    def server_uri(self) -> str:
        """WebSocket URI of the relay."""
        return f"ws://{self.host}:{self.port}{self.ws_path}"
