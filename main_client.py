#!/usr/bin/env python3
"""
Nebula Chat Client - Main Entry Point

Desktop chat client with a PyQt6 interface.

Usage:
    python main_client.py [--username NAME] [--server-ip HOST] [--port PORT]
"""

if __name__ == "__main__":
    from nebula_client.ui.client_gui import main

    main()
