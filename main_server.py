#!/usr/bin/env python3
"""
Nebula Chat Server - Main Entry Point

Relays presence, typing and chat events between connected clients and
serves the static client assets on the same port.

Usage:
    python main_server.py

Optional arguments:
    --host HOST           Bind address (default: 0.0.0.0)
    --port PORT           HTTP/WebSocket port (default: 3000)
    --static-dir DIR      Static asset directory (default: bundled assets)
    --ws-path PATH        WebSocket endpoint (default: /ws)
    --log-level LEVEL     DEBUG, INFO, WARNING or ERROR
    --log-file FILE       Also write logs to FILE
"""

if __name__ == "__main__":
    from nebula_server.main_server import main

    main()
