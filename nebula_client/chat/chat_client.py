"""
Chat client module.

This module handles client-side chat session control: the join handshake,
outbound messages, the debounced typing signal and dispatch of inbound
events to the UI.
"""

from typing import Any, Callable, Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from nebula_common.constants import EventNames, TYPING_TIMEOUT_MS
from nebula_common.protocol_definitions import (
    create_join_event, create_message_event, create_typing_event,
    decode_chat_payload
)
from nebula_client.utils.logger import logger


class ChatClient(QObject):
    """Client-side chat session controller."""

    message_received = pyqtSignal(object)  # decoded ChatPayload
    user_joined = pyqtSignal(str)  # name
    user_left = pyqtSignal(str)  # name
    user_count_changed = pyqtSignal(int)
    typing_changed = pyqtSignal(str)  # indicator text, "" clears

    def __init__(self, username: str, send_event: Callable[[str], Any],
                 typing_timeout_ms: int = TYPING_TIMEOUT_MS, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.username = username
        self.send_event = send_event
        self.user_count = 0
        self.typing_name: Optional[str] = None
        self._is_typing = False
        self.joined = False

        # Outbound: stop signal after a pause in keystrokes
        self._typing_timer = QTimer(self)
        self._typing_timer.setSingleShot(True)
        self._typing_timer.setInterval(typing_timeout_ms)
        self._typing_timer.timeout.connect(self._on_typing_timeout)

        # Inbound: clear the indicator after silence from the typist
        self._indicator_timer = QTimer(self)
        self._indicator_timer.setSingleShot(True)
        self._indicator_timer.setInterval(typing_timeout_ms)
        self._indicator_timer.timeout.connect(self.clear_typing_indicator)

    def start(self):
        """Announce ourselves to the server."""
        logger.log_join(self.username)
        self.send_event(create_join_event(self.username))
        self.joined = True

    def send_chat(self, text: str) -> Optional[str]:
        """
        Send a chat message.

        Returns the trimmed body for local rendering, or None if there was
        nothing to send.
        """
        body = text.strip()
        if not body:
            return None

        self.send_event(create_message_event(body))
        logger.log_chat_sent(body)
        self._stop_typing()
        self.clear_typing_indicator()
        return body

    def input_changed(self, text: str):
        """Emit typing start/stop signals as the input field changes."""
        if text.strip():
            self.send_event(create_typing_event(self.username))
            self._is_typing = True
            self._typing_timer.start()
        else:
            self._stop_typing(force=True)

    def _stop_typing(self, force: bool = False):
        self._typing_timer.stop()
        if self._is_typing or force:
            self.send_event(create_typing_event(False))
        self._is_typing = False

    def _on_typing_timeout(self):
        self._is_typing = False
        self.send_event(create_typing_event(False))

    def handle_event(self, event: str, data: Any):
        """Handle an inbound event from the server."""
        if event == EventNames.CHAT_MESSAGE:
            self.message_received.emit(decode_chat_payload(data))
        elif event == EventNames.PRESENCE_JOINED:
            self._handle_presence(data, joined=True)
        elif event == EventNames.PRESENCE_LEFT:
            self._handle_presence(data, joined=False)
        elif event == EventNames.TYPING_BROADCAST:
            self._handle_typing(data)
        elif event == EventNames.TYPING_STOPPED:
            if data == self.typing_name:
                self.clear_typing_indicator()
        else:
            logger.warning(f"Ignoring unknown event '{event}'")

    def _handle_presence(self, name: Any, joined: bool):
        name = str(name)
        if joined:
            self.user_count += 1
            logger.show_user_joined(name)
            self.user_joined.emit(name)
        else:
            self.user_count = max(0, self.user_count - 1)
            logger.show_user_left(name)
            self.user_left.emit(name)
            if name == self.typing_name:
                self.clear_typing_indicator()
        self.user_count_changed.emit(self.user_count)

    def _handle_typing(self, name: Any):
        if not isinstance(name, str) or not name or name == self.username:
            return
        self.typing_name = name
        self.typing_changed.emit(f"{name} is typing...")
        # start() on an active timer restarts it
        self._indicator_timer.start()

    def clear_typing_indicator(self):
        """Hide the typing indicator."""
        self._indicator_timer.stop()
        if self.typing_name is not None:
            self.typing_name = None
            self.typing_changed.emit("")

    def is_indicator_active(self) -> bool:
        return self._indicator_timer.isActive()

    def shutdown(self):
        """Stop timers before the session is discarded."""
        self.joined = False
        self._typing_timer.stop()
        self._indicator_timer.stop()
