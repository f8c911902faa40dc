"""
Server package for Nebula Chat.

This package contains all server-side functionality including:
- Connection registry
- Broadcast relay
- Static asset serving
- Configuration and utilities
"""
