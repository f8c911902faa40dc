"""
Connection registry module.

Maps opaque connection identifiers to display names. One instance is owned
by each relay; there is no module-level state.
"""

from typing import Dict, List, Optional


class RegistryError(KeyError):
    """Raised when a registry precondition is violated."""


class ConnectionRegistry:
    """Connection id -> display name mapping."""

    def __init__(self):
        self._names: Dict[str, str] = {}

    def register(self, connection_id: str, name: str) -> None:
        """Store the display name for a connection that has none yet."""
        if connection_id in self._names:
            raise RegistryError(f"Connection {connection_id} already registered")
        self._names[connection_id] = name

    def lookup(self, connection_id: str) -> Optional[str]:
        """Return the connection's display name, or None if it has not joined."""
        return self._names.get(connection_id)

    def unregister(self, connection_id: str) -> Optional[str]:
        """Remove the connection and return its prior name, if any."""
        return self._names.pop(connection_id, None)

    def names(self) -> List[str]:
        return list(self._names.values())

    def __contains__(self, connection_id: object) -> bool:
        return connection_id in self._names

    def __len__(self) -> int:
        return len(self._names)
