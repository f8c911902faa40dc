#!/usr/bin/env python3
"""
Client GUI - PyQt6 Application

This module integrates the chat session into a desktop window.
Features:
- Login form with display name validation
- Scrolling transcript with message bubbles and presence notices
- Typing indicator and online count
- Network thread running the WebSocket connection
"""

import argparse
import asyncio
import logging
import sys
import threading
from typing import Optional

# PyQt6 imports
from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel,
    QPushButton, QTextBrowser, QLineEdit, QStackedWidget
)
from PyQt6.QtCore import Qt, QThread, pyqtSignal

from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import ConnectionClosed, InvalidHandshake, InvalidURI

from nebula_common.constants import MAX_NAME_LENGTH
from nebula_common.protocol_definitions import ChatPayload, ProtocolError, decode_frame
from nebula_client.chat.chat_client import ChatClient
from nebula_client.chat.name_validation import validate_display_name
from nebula_client.chat.renderer import (
    name_initial, render_message, render_payload, render_presence, render_system
)
from nebula_client.utils.config import ClientConfig
from nebula_client.utils.logger import logger


# ============================================================================
# LOGIN WIDGET
# ============================================================================

class LoginWidget(QWidget):
    """Display name form shown before joining."""

    name_accepted = pyqtSignal(str)

    def __init__(self):
        super().__init__()
        self.setup_ui()

    def setup_ui(self):
        """Setup login form UI."""
        layout = QVBoxLayout()
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.setSpacing(10)

        title = QLabel("Nebula Chat")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        title.setStyleSheet("font-size: 20pt; font-weight: bold; color: #A5B4FC;")
        layout.addWidget(title)

        prompt = QLabel(f"Enter your name (max {MAX_NAME_LENGTH} characters):")
        prompt.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(prompt)

        self.name_field = QLineEdit()
        self.name_field.setPlaceholderText("Your name")
        self.name_field.setStyleSheet("""
            QLineEdit {
                background-color: #1E1B4B;
                color: #ECF0F1;
                border: 1px solid #312E81;
                border-radius: 5px;
                padding: 6px;
            }
        """)
        self.name_field.returnPressed.connect(self.submit)
        layout.addWidget(self.name_field)

        self.error_label = QLabel("")
        self.error_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.error_label.setStyleSheet("color: #FCA5A5;")
        layout.addWidget(self.error_label)

        buttons = QHBoxLayout()
        join_btn = QPushButton("Join")
        join_btn.clicked.connect(self.submit)
        join_btn.setStyleSheet("""
            QPushButton {
                background-color: #4F46E5;
                color: white;
                border: none;
                padding: 8px 15px;
                border-radius: 5px;
                font-weight: bold;
            }
            QPushButton:hover {
                background-color: #4338CA;
            }
        """)
        buttons.addWidget(join_btn)

        anonymous_btn = QPushButton("Skip")
        anonymous_btn.setToolTip("Join with the default name")
        anonymous_btn.clicked.connect(self.skip)
        buttons.addWidget(anonymous_btn)
        layout.addLayout(buttons)

        self.setLayout(layout)

    def submit(self):
        """Validate the entered name and accept it if valid."""
        self._accept(self.name_field.text())

    def skip(self):
        """Accept the fallback name, as if the prompt was cancelled."""
        self._accept(None)

    def _accept(self, raw: Optional[str]):
        result = validate_display_name(raw)
        if not result.is_valid:
            self.error_label.setText(result.error)
            return
        self.error_label.setText("")
        self.name_accepted.emit(result.name)


# ============================================================================
# CHAT WIDGET
# ============================================================================

class ChatWidget(QWidget):
    """Chat interface with transcript and input."""

    message_sent = pyqtSignal(str)  # message text
    input_changed = pyqtSignal(str)  # current input text

    def __init__(self):
        super().__init__()
        self.setup_ui()

    def setup_ui(self):
        """Setup chat interface UI."""
        layout = QVBoxLayout()
        layout.setSpacing(5)
        layout.setContentsMargins(5, 5, 5, 5)

        # Header: own badge and name, online count
        header = QHBoxLayout()
        self.initial_label = QLabel("")
        self.initial_label.setFixedSize(28, 28)
        self.initial_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.initial_label.setStyleSheet("background-color: #312E81; border-radius: 14px; font-weight: bold;")
        header.addWidget(self.initial_label)
        self.username_label = QLabel("")
        header.addWidget(self.username_label)
        header.addStretch()
        self.user_count_label = QLabel("0 online")
        self.user_count_label.setStyleSheet("color: #86EFAC;")
        header.addWidget(self.user_count_label)
        layout.addLayout(header)

        # Transcript
        self.chat_text = QTextBrowser()
        self.chat_text.setReadOnly(True)
        self.chat_text.setOpenExternalLinks(False)
        self.chat_text.setStyleSheet("""
            QTextBrowser {
                background-color: #0B0D1F;
                color: #ECF0F1;
                border: 1px solid #1E1B4B;
                border-radius: 5px;
                padding: 5px;
                font-size: 10pt;
            }
        """)
        layout.addWidget(self.chat_text)

        self.typing_label = QLabel("")
        self.typing_label.setStyleSheet("color: #A5B4FC; font-style: italic;")
        layout.addWidget(self.typing_label)

        # Input area
        input_layout = QHBoxLayout()

        self.input_field = QLineEdit()
        self.input_field.setPlaceholderText("Type a message...")
        self.input_field.setStyleSheet("""
            QLineEdit {
                background-color: #1E1B4B;
                color: #ECF0F1;
                border: 1px solid #312E81;
                border-radius: 5px;
                padding: 5px;
            }
        """)
        self.input_field.returnPressed.connect(self.send_message)
        # textEdited fires on user edits only, not on clear()
        self.input_field.textEdited.connect(self.input_changed.emit)
        input_layout.addWidget(self.input_field)

        self.send_button = QPushButton("Send")
        self.send_button.clicked.connect(self.send_message)
        self.send_button.setStyleSheet("""
            QPushButton {
                background-color: #4F46E5;
                color: white;
                border: none;
                padding: 8px 15px;
                border-radius: 5px;
                font-weight: bold;
            }
            QPushButton:hover {
                background-color: #4338CA;
            }
        """)
        input_layout.addWidget(self.send_button)

        layout.addLayout(input_layout)
        self.setLayout(layout)

    def set_identity(self, username: str):
        """Show our own name and badge in the header."""
        self.username_label.setText(username)
        self.initial_label.setText(name_initial(username))

    def send_message(self):
        """Send chat message."""
        text = self.input_field.text().strip()
        if text:
            self.message_sent.emit(text)
            self.input_field.clear()

    def add_entry(self, fragment: str):
        """Append a rendered transcript entry and scroll to it."""
        self.chat_text.append(fragment)
        scrollbar = self.chat_text.verticalScrollBar()
        scrollbar.setValue(scrollbar.maximum())

    def set_typing_text(self, text: str):
        self.typing_label.setText(text)

    def set_user_count(self, count: int):
        self.user_count_label.setText(f"{count} online")

    def set_input_enabled(self, enabled: bool):
        self.input_field.setEnabled(enabled)
        self.send_button.setEnabled(enabled)


# ============================================================================
# MAIN WINDOW
# ============================================================================

class ClientMainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, config: ClientConfig = None):
        super().__init__()
        self.config = config or ClientConfig()
        self.username: Optional[str] = None
        self.network_thread: Optional[NetworkThread] = None
        self.chat_client: Optional[ChatClient] = None

        self.setup_ui()
        self.setup_connections()

    def setup_ui(self):
        """Setup the main window UI."""
        self.setWindowTitle("Nebula Chat")
        self.setGeometry(100, 100, 520, 720)

        self.stack = QStackedWidget()
        self.login_widget = LoginWidget()
        self.chat_widget = ChatWidget()
        self.stack.addWidget(self.login_widget)
        self.stack.addWidget(self.chat_widget)
        self.setCentralWidget(self.stack)

        self.apply_dark_theme()

    def setup_connections(self):
        """Setup signal-slot connections."""
        self.login_widget.name_accepted.connect(self.start_session)
        self.chat_widget.message_sent.connect(self.on_send_message)
        self.chat_widget.input_changed.connect(self.on_input_changed)

    def apply_dark_theme(self):
        """Apply dark theme styling."""
        self.setStyleSheet("""
            QMainWindow {
                background-color: #05060F;
            }
            QWidget {
                background-color: #05060F;
                color: #ECF0F1;
            }
        """)

    # ========================================================================
    # SESSION
    # ========================================================================

    def start_session(self, username: str):
        """Open the connection and switch to the chat page."""
        self.username = username
        self.config.username = username
        self.chat_widget.set_identity(username)
        # Nothing can be sent until the join is on the wire
        self.chat_widget.set_input_enabled(False)
        self.stack.setCurrentWidget(self.chat_widget)

        self.chat_widget.add_entry(render_system(f"Connecting to {self.config.host}:{self.config.port}..."))
        self.setWindowTitle("Nebula Chat - Connecting...")

        self.network_thread = NetworkThread(self.config.server_uri, self.config.connect_timeout)
        self.chat_client = ChatClient(username, self.network_thread.send_message,
                                      typing_timeout_ms=self.config.typing_timeout_ms, parent=self)

        self.chat_client.message_received.connect(self.on_message_received)
        self.chat_client.user_joined.connect(lambda name: self.chat_widget.add_entry(render_presence(name, True)))
        self.chat_client.user_left.connect(lambda name: self.chat_widget.add_entry(render_presence(name, False)))
        self.chat_client.user_count_changed.connect(self.chat_widget.set_user_count)
        self.chat_client.typing_changed.connect(self.chat_widget.set_typing_text)

        self.network_thread.event_received.connect(self.chat_client.handle_event)
        self.network_thread.connected.connect(self.on_connected)
        self.network_thread.disconnected.connect(self.on_disconnected)
        self.network_thread.start()

    def on_connected(self):
        """Handle successful connection."""
        self.chat_widget.add_entry(render_system("Connected to server"))
        self.setWindowTitle(f"Nebula Chat - {self.username}")
        self.chat_client.start()
        self.chat_widget.set_input_enabled(True)
        self.chat_widget.input_field.setFocus()

    def on_disconnected(self):
        """Handle disconnection."""
        self.chat_widget.add_entry(render_system("Disconnected from server"))
        self.chat_widget.set_input_enabled(False)
        self.setWindowTitle("Nebula Chat (Disconnected)")
        if self.chat_client:
            self.chat_client.shutdown()
            self.chat_client.clear_typing_indicator()

    def on_send_message(self, text: str):
        """Send a message and render it locally without waiting for the server."""
        if not self.chat_client or not self.chat_client.joined:
            logger.warning("Not joined yet, message not sent")
            return
        body = self.chat_client.send_chat(text)
        if body:
            self.chat_widget.add_entry(render_message(self.username, body, is_self=True))

    def on_input_changed(self, text: str):
        if self.chat_client:
            self.chat_client.input_changed(text)

    def on_message_received(self, payload: ChatPayload):
        self.chat_widget.add_entry(render_payload(payload, self.username))

    def closeEvent(self, event):
        """Clean up resources when the window is closing."""
        if self.chat_client:
            self.chat_client.shutdown()
        if self.network_thread:
            self.network_thread.stop()
            self.network_thread.wait(2000)
        super().closeEvent(event)


# ============================================================================
# NETWORK THREAD
# ============================================================================

class NetworkThread(QThread):
    """Thread for handling network communication."""

    event_received = pyqtSignal(str, object)  # event name, payload
    connected = pyqtSignal()
    disconnected = pyqtSignal()

    def __init__(self, uri: str, connect_timeout: float = 10.0):
        super().__init__()
        self.uri = uri
        self.connect_timeout = connect_timeout
        self.connection: Optional[ClientConnection] = None
        self.loop: Optional[asyncio.AbstractEventLoop] = None
        self.loop_ready = threading.Event()

    def run(self):
        """Run network loop."""
        self.loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self.loop)
        self.loop_ready.set()
        try:
            self.loop.run_until_complete(self._connect_and_listen())
        finally:
            self.loop.close()

    async def _connect_and_listen(self):
        """Connect to server and listen for events."""
        try:
            logger.info(f"Attempting to connect to {self.uri}...")
            async with connect(self.uri, open_timeout=self.connect_timeout) as connection:
                self.connection = connection
                logger.log_connection(self.uri, True)
                self.connected.emit()

                async for raw in connection:
                    try:
                        event, data = decode_frame(raw)
                    except ProtocolError as e:
                        logger.warning(f"Dropping frame from server: {e}")
                        continue
                    self.event_received.emit(event, data)

        except (OSError, TimeoutError, asyncio.TimeoutError, InvalidURI, InvalidHandshake) as e:
            logger.log_connection(self.uri, False)
            logger.log_error("connection", e)
        except ConnectionClosed as e:
            logger.info(f"Connection closed: {e}")
        finally:
            self.connection = None
            self.disconnected.emit()
            logger.info("Disconnected from server")

    async def send_message_async(self, frame: str):
        """Send a frame asynchronously."""
        if self.connection is None:
            logger.warning("Not connected, frame dropped")
            return
        try:
            await self.connection.send(frame)
        except ConnectionClosed as e:
            logger.warning(f"Send failed, connection closed: {e}")

    def send_message(self, frame: str):
        """Send a frame from the main thread."""
        if not self.loop_ready.is_set():
            logger.warning("Event loop not ready, frame dropped")
            return
        if self.loop and not self.loop.is_closed():
            asyncio.run_coroutine_threadsafe(self.send_message_async(frame), self.loop)

    async def _close(self):
        if self.connection is not None:
            await self.connection.close()

    def stop(self):
        """Close the connection; the listen loop then ends."""
        if self.loop and self.loop.is_running():
            asyncio.run_coroutine_threadsafe(self._close(), self.loop)


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    env = ClientConfig.from_env()
    parser = argparse.ArgumentParser(description='Nebula Chat client')
    parser.add_argument('--username', type=str, default=None,
                        help='Display name (default: asked in the login form)')
    parser.add_argument('--server-ip', type=str, default=env.host,
                        help=f'Server host (default: {env.host})')
    parser.add_argument('--port', type=int, default=env.port,
                        help=f'Server port (default: {env.port})')
    parser.add_argument('--log-level', type=str, default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Log level (default: INFO)')
    return parser


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logger.set_level(getattr(logging, args.log_level))

    app = QApplication(sys.argv[:1])

    config = ClientConfig(args.server_ip, args.port)
    window = ClientMainWindow(config)
    window.show()

    if args.username:
        window.login_widget.name_field.setText(args.username)
        window.login_widget.submit()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
