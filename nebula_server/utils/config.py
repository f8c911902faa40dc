"""
Server configuration module.

This module handles server-side configuration settings.
"""

import os
from pathlib import Path
from typing import Optional

from nebula_common.constants import (
    DEFAULT_SERVER_HOST, DEFAULT_PORT, DEFAULT_WS_PATH, MAX_FRAME_SIZE,
    PING_INTERVAL, PING_TIMEOUT
)

# Bundled static assets shipped with the package
DEFAULT_STATIC_DIR = Path(__file__).resolve().parent.parent / 'public'


class ServerConfig:
    """Server configuration class."""

    def __init__(self, host: str = DEFAULT_SERVER_HOST, port: int = DEFAULT_PORT,
                 static_dir: Optional[str] = None, ws_path: str = DEFAULT_WS_PATH):
        self.host = host
        self.port = port
        self.static_dir = Path(static_dir) if static_dir else DEFAULT_STATIC_DIR
        self.ws_path = ws_path

        # Transport settings
        self.max_frame_size = MAX_FRAME_SIZE
        self.ping_interval = PING_INTERVAL
        self.ping_timeout = PING_TIMEOUT

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Build a config from NEBULA_* environment variables."""
        return cls(
            host=os.environ.get('NEBULA_HOST', DEFAULT_SERVER_HOST),
            port=int(os.environ.get('NEBULA_PORT', str(DEFAULT_PORT))),
            static_dir=os.environ.get('NEBULA_STATIC_DIR') or None,
        )

    def get_transport_settings(self):
        """Get keyword arguments for the WebSocket server."""
        return {
            'max_size': self.max_frame_size,
            'ping_interval': self.ping_interval,
            'ping_timeout': self.ping_timeout
        }
