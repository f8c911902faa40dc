"""
Shared definitions for Nebula Chat.

This package contains the constants and wire protocol used by both the
relay server and the desktop client.
"""
