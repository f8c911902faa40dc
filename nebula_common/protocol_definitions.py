"""
Protocol definitions for Nebula Chat.

This module defines the frame format and event payloads used in communication
between client and server components. Every WebSocket text frame carries one
JSON object of the form ``{"event": <name>, "data": <payload>}``.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Tuple, Union

from nebula_common.constants import (
    EventNames, SYSTEM_SENDER, UNKNOWN_SENDER, UNKNOWN_MESSAGE
)


class ProtocolError(ValueError):
    """Raised when a frame cannot be decoded into an event."""


@dataclass(frozen=True)
class StructuredMessage:
    """Chat message carrying a sender name."""
    name: str
    message: str


@dataclass(frozen=True)
class PlainSystemMessage:
    """Bare string payload, shown as coming from the system."""
    message: str
    name: str = SYSTEM_SENDER


@dataclass(frozen=True)
class Unrecognized:
    """Payload of an unexpected shape."""
    raw: Any
    name: str = UNKNOWN_SENDER
    message: str = UNKNOWN_MESSAGE


ChatPayload = Union[StructuredMessage, PlainSystemMessage, Unrecognized]


def encode_frame(event: str, data: Any) -> str:
    """Serialize an event and its payload into a text frame."""
    return json.dumps({"event": event, "data": data})


def decode_frame(raw: Union[str, bytes]) -> Tuple[str, Any]:
    """
    Parse a text frame into ``(event, data)``.

    Raises ProtocolError if the frame is not a JSON object with a
    non-empty string ``event`` field.
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise ProtocolError(f"Frame is not valid UTF-8: {e}") from e

    try:
        frame = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ProtocolError(f"Malformed JSON: {e}") from e

    if not isinstance(frame, dict):
        raise ProtocolError("Frame must be a JSON object")

    event = frame.get("event")
    if not isinstance(event, str) or not event:
        raise ProtocolError("Frame has no event name")

    return event, frame.get("data")


def decode_chat_payload(data: Any) -> ChatPayload:
    """Decode an untyped chat-message payload into a tagged variant."""
    if isinstance(data, dict):
        name = data.get("name")
        if isinstance(name, str) and name:
            message = data.get("message")
            if not isinstance(message, str):
                message = json.dumps(message)
            return StructuredMessage(name=name, message=message)
    elif isinstance(data, str):
        return PlainSystemMessage(message=data)
    return Unrecognized(raw=data)


# Client to Server

def create_join_event(name: str) -> str:
    """Create a join event."""
    return encode_frame(EventNames.JOIN, name)


def create_message_event(body: str) -> str:
    """Create a chat message event."""
    return encode_frame(EventNames.MESSAGE, body)


def create_typing_event(name_or_false: Union[str, bool]) -> str:
    """Create a typing event: the sender's name to start, False to stop."""
    return encode_frame(EventNames.TYPING, name_or_false)


# Server to Client

def create_presence_joined_event(name: str) -> str:
    """Create a presence-joined event."""
    return encode_frame(EventNames.PRESENCE_JOINED, name)


def create_presence_left_event(name: str) -> str:
    """Create a presence-left event."""
    return encode_frame(EventNames.PRESENCE_LEFT, name)


def create_chat_message_event(name: str, message: str) -> str:
    """Create a relayed chat message event."""
    payload: Dict[str, Any] = {
        "name": name,
        "message": message
    }
    return encode_frame(EventNames.CHAT_MESSAGE, payload)


def create_typing_broadcast_event(name: str) -> str:
    """Create a typing-broadcast event."""
    return encode_frame(EventNames.TYPING_BROADCAST, name)


def create_typing_stopped_event(name: str) -> str:
    """Create a typing-stopped event."""
    return encode_frame(EventNames.TYPING_STOPPED, name)
