#!/usr/bin/env python3
"""
Unit tests for the message renderer.

Covers width banding at the band boundaries, self versus other layout
and escaping of user text.
"""

import unittest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from nebula_common.protocol_definitions import StructuredMessage, PlainSystemMessage, Unrecognized
from nebula_client.chat.renderer import (
    BubbleWidth, bubble_width, name_initial, render_message, render_payload,
    render_presence, render_system
)


class TestBubbleWidth(unittest.TestCase):
    """Test cases for bubble_width."""

    def test_band_boundaries(self):
        cases = {
            0: BubbleWidth.COMPACT,
            14: BubbleWidth.COMPACT,
            15: BubbleWidth.NARROW,
            29: BubbleWidth.NARROW,
            30: BubbleWidth.MEDIUM,
            49: BubbleWidth.MEDIUM,
            50: BubbleWidth.WIDE,
            500: BubbleWidth.WIDE,
        }
        for length, expected in cases.items():
            with self.subTest(length=length):
                self.assertEqual(bubble_width("x" * length), expected)


class TestRenderMessage(unittest.TestCase):
    """Test cases for render_message and friends."""

    def test_other_message_has_badge_and_name(self):
        fragment = render_message("rin", "hello")
        self.assertIn('align="left"', fragment)
        self.assertIn("<b>R</b>", fragment)
        self.assertIn(">rin<", fragment)
        self.assertIn("hello", fragment)

    def test_self_message_is_right_aligned_without_badge(self):
        fragment = render_message("Nova", "hello", is_self=True)
        self.assertIn('align="right"', fragment)
        self.assertIn(">You<", fragment)
        self.assertNotIn("<b>N</b>", fragment)
        self.assertNotIn("Nova", fragment)

    def test_width_attribute_follows_band(self):
        self.assertNotIn("width=", render_message("Nova", "short", is_self=True))
        self.assertIn('width="85%"', render_message("Nova", "x" * 50, is_self=True))

    def test_user_text_is_escaped(self):
        fragment = render_message("<i>x</i>", "<script>alert(1)</script>")
        self.assertNotIn("<script>", fragment)
        self.assertIn("&lt;script&gt;", fragment)
        self.assertNotIn("<i>x</i>", fragment)

    def test_name_initial(self):
        self.assertEqual(name_initial("nova"), "N")
        self.assertEqual(name_initial(""), "?")

    def test_render_payload_variants(self):
        own = render_payload(StructuredMessage("Nova", "mine"), own_name="Nova")
        self.assertIn(">You<", own)

        other = render_payload(StructuredMessage("Rin", "theirs"), own_name="Nova")
        self.assertIn(">Rin<", other)

        system = render_payload(PlainSystemMessage("maintenance"), own_name="Nova")
        self.assertIn(">System<", system)
        self.assertIn("maintenance", system)

        unknown = render_payload(Unrecognized(raw=42), own_name="Nova")
        self.assertIn(">Unknown<", unknown)
        self.assertIn("New message", unknown)

    def test_presence_and_system_lines(self):
        self.assertIn("Rin joined", render_presence("Rin", joined=True))
        self.assertIn("Rin left", render_presence("Rin", joined=False))
        self.assertIn("Connected", render_system("Connected"))
        self.assertIn("&lt;b&gt;", render_presence("<b>", joined=True))


if __name__ == '__main__':
    unittest.main()
