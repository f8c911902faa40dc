"""
Chat module for server-side relaying.

Handles:
- Mapping connections to display names
- Presence, typing and message broadcasting
- Cleanup on disconnect
"""

from nebula_server.chat.registry import ConnectionRegistry, RegistryError
from nebula_server.chat.relay import BroadcastRelay

__all__ = ["ConnectionRegistry", "RegistryError", "BroadcastRelay"]
