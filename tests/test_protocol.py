#!/usr/bin/env python3
"""
Unit tests for protocol definitions.

Covers frame decoding errors and the decode step that turns untyped
chat-message payloads into StructuredMessage, PlainSystemMessage or
Unrecognized.
"""

import json
import unittest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from nebula_common.constants import EventNames
from nebula_common.protocol_definitions import (
    ProtocolError, StructuredMessage, PlainSystemMessage, Unrecognized,
    decode_frame, decode_chat_payload, create_chat_message_event,
    create_typing_event
)


class TestDecodeFrame(unittest.TestCase):
    """Test cases for decode_frame."""

    def test_decodes_event_and_data(self):
        event, data = decode_frame(create_chat_message_event("Nova", "hello"))
        self.assertEqual(event, EventNames.CHAT_MESSAGE)
        self.assertEqual(data, {"name": "Nova", "message": "hello"})

    def test_accepts_bytes(self):
        event, data = decode_frame(b'{"event": "join", "data": "Rin"}')
        self.assertEqual((event, data), (EventNames.JOIN, "Rin"))

    def test_missing_data_is_none(self):
        self.assertEqual(decode_frame('{"event": "typing"}'), (EventNames.TYPING, None))

    def test_typing_stop_keeps_false(self):
        """The stop signal is a literal false on the wire."""
        self.assertEqual(json.loads(create_typing_event(False))["data"], False)

    def test_rejects_malformed_json(self):
        with self.assertRaises(ProtocolError):
            decode_frame('{"event": ')

    def test_rejects_non_object(self):
        with self.assertRaises(ProtocolError):
            decode_frame('["join", "Nova"]')

    def test_rejects_missing_event(self):
        with self.assertRaises(ProtocolError):
            decode_frame('{"data": "Nova"}')
        with self.assertRaises(ProtocolError):
            decode_frame('{"event": 7, "data": "Nova"}')

    def test_rejects_invalid_utf8(self):
        with self.assertRaises(ProtocolError):
            decode_frame(b'\xff\xfe')


class TestDecodeChatPayload(unittest.TestCase):
    """Test cases for decode_chat_payload."""

    def test_structured_message(self):
        payload = decode_chat_payload({"name": "Nova", "message": "hello"})
        self.assertEqual(payload, StructuredMessage(name="Nova", message="hello"))

    def test_structured_message_with_non_text_body(self):
        """A non-string body is shown as its JSON text."""
        payload = decode_chat_payload({"name": "Nova", "message": {"x": 1}})
        self.assertIsInstance(payload, StructuredMessage)
        self.assertEqual(payload.message, '{"x": 1}')

    def test_bare_string_is_system_message(self):
        payload = decode_chat_payload("Server restarting")
        self.assertIsInstance(payload, PlainSystemMessage)
        self.assertEqual(payload.name, "System")
        self.assertEqual(payload.message, "Server restarting")

    def test_other_shapes_are_unrecognized(self):
        for raw in (None, 42, ["a"], {"message": "no name"}, {"name": ""}):
            with self.subTest(raw=raw):
                payload = decode_chat_payload(raw)
                self.assertIsInstance(payload, Unrecognized)
                self.assertEqual(payload.name, "Unknown")
                self.assertEqual(payload.message, "New message")


if __name__ == '__main__':
    unittest.main()
