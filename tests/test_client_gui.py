#!/usr/bin/env python3
"""
Unit tests for the client GUI widgets.

Tests the login form validation flow, the chat input and the optimistic
local rendering of our own messages.
"""

import os
import time
import unittest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from nebula_common.constants import EventNames
from nebula_common.protocol_definitions import create_message_event, decode_frame, StructuredMessage
from nebula_client.chat.chat_client import ChatClient
from nebula_client.ui.client_gui import ChatWidget, ClientMainWindow, LoginWidget, NetworkThread
from nebula_client.utils.config import ClientConfig


class TestLoginWidget(unittest.TestCase):
    """Test cases for LoginWidget."""

    @classmethod
    def setUpClass(cls):
        """Create QApplication once for all tests."""
        if not QApplication.instance():
            cls.app = QApplication([])
        else:
            cls.app = QApplication.instance()

    def setUp(self):
        self.widget = LoginWidget()
        self.accepted = []
        self.widget.name_accepted.connect(self.accepted.append)

    def test_invalid_name_keeps_form_open(self):
        """An invalid name shows the error and emits nothing."""
        self.widget.name_field.setText("x" * 16)
        self.widget.submit()

        self.assertEqual(self.accepted, [])
        self.assertIn("15", self.widget.error_label.text())

    def test_valid_name_is_accepted(self):
        self.widget.name_field.setText("   ")
        self.widget.submit()
        self.widget.name_field.setText(" Nova ")
        self.widget.submit()

        self.assertEqual(self.accepted, ["Nova"])
        self.assertEqual(self.widget.error_label.text(), "")

    def test_skip_uses_fallback_name(self):
        self.widget.skip()
        self.assertEqual(self.accepted, ["Anonymous"])


class TestChatWidget(unittest.TestCase):
    """Test cases for ChatWidget."""

    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication([])
        else:
            cls.app = QApplication.instance()

    def setUp(self):
        self.widget = ChatWidget()

    def test_send_message_emits_and_clears(self):
        sent = []
        self.widget.message_sent.connect(sent.append)

        self.widget.input_field.setText("  hello ")
        self.widget.send_message()

        self.assertEqual(sent, ["hello"])
        self.assertEqual(self.widget.input_field.text(), "")

    def test_blank_input_is_not_sent(self):
        sent = []
        self.widget.message_sent.connect(sent.append)

        self.widget.input_field.setText("   ")
        self.widget.send_message()

        self.assertEqual(sent, [])

    def test_labels(self):
        self.widget.set_identity("nova")
        self.widget.set_user_count(3)
        self.widget.set_typing_text("Rin is typing...")

        self.assertEqual(self.widget.initial_label.text(), "N")
        self.assertEqual(self.widget.user_count_label.text(), "3 online")
        self.assertEqual(self.widget.typing_label.text(), "Rin is typing...")


class TestClientMainWindow(unittest.TestCase):
    """Test cases for ClientMainWindow message flow without a network."""

    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication([])
        else:
            cls.app = QApplication.instance()

    def setUp(self):
        self.window = ClientMainWindow()
        self.sent = []
        self.window.username = "Nova"
        self.window.chat_client = ChatClient("Nova", self.sent.append, parent=self.window)
        self.window.chat_client.start()
        self.sent.clear()

    def tearDown(self):
        self.window.chat_client.shutdown()
        self.window.close()

    def test_own_message_renders_locally(self):
        """Our message appears in the transcript as soon as it is sent."""
        self.window.on_send_message("hello")

        self.assertEqual([decode_frame(f) for f in self.sent], [(EventNames.MESSAGE, "hello")])
        self.assertIn("hello", self.window.chat_widget.chat_text.toPlainText())
        self.assertIn("You", self.window.chat_widget.chat_text.toPlainText())

    def test_received_message_renders_with_sender(self):
        self.window.on_message_received(StructuredMessage(name="Rin", message="hi there"))

        text = self.window.chat_widget.chat_text.toPlainText()
        self.assertIn("Rin", text)
        self.assertIn("hi there", text)

    def test_message_before_join_is_not_rendered(self):
        """Nothing is sent or shown as ours until the join has gone out."""
        self.window.chat_client.shutdown()

        self.window.on_send_message("hello")

        self.assertEqual(self.sent, [])
        self.assertNotIn("hello", self.window.chat_widget.chat_text.toPlainText())


class TestSessionStartup(unittest.TestCase):
    """Test the chat page while the connection is still opening."""

    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication([])
        else:
            cls.app = QApplication.instance()

    def setUp(self):
        # Nothing listens on port 1, so the connection attempt fails
        self.window = ClientMainWindow(ClientConfig("127.0.0.1", 1))

    def tearDown(self):
        if self.window.network_thread:
            self.window.network_thread.wait(5000)
        self.window.chat_client.shutdown()
        self.window.close()

    def test_input_disabled_until_connected(self):
        self.window.start_session("Nova")

        self.assertFalse(self.window.chat_widget.input_field.isEnabled())
        self.assertFalse(self.window.chat_widget.send_button.isEnabled())

        self.window.on_send_message("hello")

        text = self.window.chat_widget.chat_text.toPlainText()
        self.assertNotIn("hello", text)
        self.assertNotIn("You", text)

    def test_input_enabled_after_join(self):
        self.window.start_session("Nova")
        self.window.network_thread.wait(5000)

        self.window.on_connected()

        self.assertTrue(self.window.chat_client.joined)
        self.assertTrue(self.window.chat_widget.input_field.isEnabled())
        self.assertTrue(self.window.chat_widget.send_button.isEnabled())


class TestNetworkThread(unittest.TestCase):
    """Test NetworkThread sends outside a running session."""

    def test_send_before_loop_is_dropped_without_blocking(self):
        thread = NetworkThread("ws://127.0.0.1:1/ws")

        started = time.monotonic()
        thread.send_message(create_message_event("hello"))

        self.assertLess(time.monotonic() - started, 1.0)
        self.assertIsNone(thread.loop)


if __name__ == '__main__':
    unittest.main()
