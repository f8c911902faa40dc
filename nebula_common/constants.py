"""
Shared constants for Nebula Chat.

This module contains all constants used across client and server components.
"""

# Network Configuration
DEFAULT_HOST = 'localhost'
DEFAULT_SERVER_HOST = '0.0.0.0'
DEFAULT_PORT = 3000
DEFAULT_WS_PATH = '/ws'

# Frame limits
MAX_FRAME_SIZE = 64 * 1024  # bytes per WebSocket frame

# Keepalive (transport-level pings, not application heartbeats)
PING_INTERVAL = 20  # seconds
PING_TIMEOUT = 20  # seconds

# Client connect timeout
CONNECT_TIMEOUT = 10.0  # seconds

# Display names
MAX_NAME_LENGTH = 15
FALLBACK_NAME = 'Anonymous'
SYSTEM_SENDER = 'System'
UNKNOWN_SENDER = 'Unknown'
UNKNOWN_MESSAGE = 'New message'

# Typing indicator
TYPING_TIMEOUT_MS = 2000

# Bubble width thresholds (body length, exclusive upper bounds)
COMPACT_MAX_LENGTH = 15
NARROW_MAX_LENGTH = 30
MEDIUM_MAX_LENGTH = 50

# Static assets
STATIC_INDEX = 'index.html'

# Logging
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


# Event names
class EventNames:
    # Client to Server
    JOIN = 'join'
    MESSAGE = 'message'
    TYPING = 'typing'

    # Server to Client
    PRESENCE_JOINED = 'presence-joined'
    PRESENCE_LEFT = 'presence-left'
    CHAT_MESSAGE = 'chat-message'
    TYPING_BROADCAST = 'typing-broadcast'
    TYPING_STOPPED = 'typing-stopped'
