"""
Client package for Nebula Chat.

This package contains all client-side functionality including:
- Chat session control and typing signals
- Display name validation
- Transcript rendering
- PyQt6 user interface and network thread
"""
