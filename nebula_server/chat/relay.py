"""
Broadcast relay module.

This module forwards events from one connection to every other open
connection. Handlers are invoked from a single asyncio event loop, so the
registry and the connection table are mutated one event at a time.
"""

from typing import Any, Dict

from websockets.exceptions import ConnectionClosed

from nebula_common.constants import EventNames
from nebula_common.protocol_definitions import (
    create_presence_joined_event, create_presence_left_event,
    create_chat_message_event, create_typing_broadcast_event,
    create_typing_stopped_event
)
from nebula_server.chat.registry import ConnectionRegistry
from nebula_server.utils.logger import logger


class BroadcastRelay:
    """Server-side relay for presence, typing and chat events."""

    def __init__(self, registry: ConnectionRegistry):
        self.registry = registry
        self.connections: Dict[str, Any] = {}  # id -> open connection

    async def broadcast(self, frame: str, exclude_id: str) -> int:
        """
        Send a frame to all open connections except the origin.

        Delivery is fire-and-forget: a failed send is logged and skipped.
        Returns the number of connections the frame was written to.
        """
        delivered = 0
        # Snapshot: a close may be processed while we await a send
        for connection_id, connection in list(self.connections.items()):
            if connection_id == exclude_id:
                continue
            try:
                await connection.send(frame)
                delivered += 1
            except ConnectionClosed as e:
                logger.warning(f"Dropped frame for closed connection id={connection_id}: {e}")
            except OSError as e:
                logger.error(f"Failed to broadcast to id={connection_id}: {e}")
        return delivered

    def is_open(self, connection_id: str) -> bool:
        return connection_id in self.connections

    async def handle_open(self, connection_id: str, connection: Any) -> None:
        """Track a new anonymous connection."""
        self.connections[connection_id] = connection

    async def handle_join(self, connection_id: str, name: Any) -> None:
        """Name an anonymous connection and announce it to the others."""
        if not self.is_open(connection_id):
            logger.warning(f"Join from unknown connection id={connection_id}")
            return

        current = self.registry.lookup(connection_id)
        if current is not None:
            logger.log_rejoin_ignored(current, connection_id, name)
            return

        if not isinstance(name, str) or not name:
            logger.warning(f"Ignoring join with invalid name {name!r} from id={connection_id}")
            return

        self.registry.register(connection_id, name)
        logger.log_join(name, connection_id)

        await self.broadcast(create_presence_joined_event(name), exclude_id=connection_id)

    async def handle_message(self, connection_id: str, body: Any) -> None:
        """Relay a chat message from a named connection."""
        name = self.registry.lookup(connection_id)
        if name is None:
            logger.debug(f"Dropping message from anonymous connection id={connection_id}")
            return

        if not isinstance(body, str):
            logger.warning(f"Dropping non-text message from {name} (id={connection_id})")
            return

        logger.log_chat(name, connection_id, body)
        await self.broadcast(create_chat_message_event(name, body), exclude_id=connection_id)

    async def handle_typing(self, connection_id: str, flag: Any) -> None:
        """Relay a typing start/stop signal from a named connection."""
        name = self.registry.lookup(connection_id)
        if name is None:
            logger.debug(f"Dropping typing signal from anonymous connection id={connection_id}")
            return

        if flag:
            frame = create_typing_broadcast_event(name)
        else:
            frame = create_typing_stopped_event(name)
        await self.broadcast(frame, exclude_id=connection_id)

    async def handle_close(self, connection_id: str) -> None:
        """Forget a connection and announce its departure if it had joined."""
        self.connections.pop(connection_id, None)
        name = self.registry.unregister(connection_id)
        logger.log_disconnect(name, connection_id)

        if name is not None:
            await self.broadcast(create_presence_left_event(name), exclude_id=connection_id)

    async def dispatch(self, connection_id: str, event: str, data: Any) -> None:
        """Route a decoded client event to its handler."""
        if event == EventNames.JOIN:
            await self.handle_join(connection_id, data)
        elif event == EventNames.MESSAGE:
            await self.handle_message(connection_id, data)
        elif event == EventNames.TYPING:
            await self.handle_typing(connection_id, data)
        else:
            logger.warning(f"Unknown event '{event}' from id={connection_id}")
