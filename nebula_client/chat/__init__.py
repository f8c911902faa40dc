"""
Chat module for client-side messaging functionality.

Handles:
- Outbound join, message and typing events
- Inbound event dispatch
- Display name validation
- Rendering transcript entries
"""
