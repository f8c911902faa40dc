#!/usr/bin/env python3
"""
Nebula Chat Relay Server - Main Entry Point

This is the main entry point for the server application.
It wires the connection registry, the broadcast relay and static asset
serving onto a single WebSocket port.
"""

import argparse
import asyncio
import logging
import os

from websockets.asyncio.server import ServerConnection, serve
from websockets.exceptions import ConnectionClosed

from nebula_common.constants import DEFAULT_SERVER_HOST, DEFAULT_PORT, DEFAULT_WS_PATH
from nebula_common.protocol_definitions import ProtocolError, decode_frame
from nebula_server.chat.registry import ConnectionRegistry
from nebula_server.chat.relay import BroadcastRelay
from nebula_server.static_files import StaticAssetHandler
from nebula_server.utils.config import ServerConfig
from nebula_server.utils.logger import logger


class RelayServer:
    """Main server class that integrates all functionality."""

    def __init__(self, config: ServerConfig = None):
        self.config = config or ServerConfig()
        self.registry = ConnectionRegistry()
        self.relay = BroadcastRelay(self.registry)
        self.static_handler = StaticAssetHandler(self.config.static_dir, self.config.ws_path)

    async def handle_client(self, connection: ServerConnection):
        """Handle individual client connection."""
        connection_id = str(connection.id)
        logger.log_connection(connection.remote_address, connection_id)

        await self.relay.handle_open(connection_id, connection)

        try:
            async for raw in connection:
                try:
                    event, data = decode_frame(raw)
                except ProtocolError as e:
                    logger.warning(f"Dropping frame from id={connection_id}: {e}")
                    continue

                logger.debug(f"Received from id={connection_id}: {event}")
                await self.relay.dispatch(connection_id, event, data)

        except ConnectionClosed as e:
            logger.debug(f"Connection id={connection_id} closed abnormally: {e}")
        finally:
            await self.relay.handle_close(connection_id)

    def serve(self):
        """Return the (not yet started) WebSocket server context manager."""
        return serve(
            self.handle_client,
            self.config.host,
            self.config.port,
            process_request=self.static_handler,
            **self.config.get_transport_settings()
        )

    async def start(self):
        """Start the server and run until cancelled."""
        async with self.serve() as server:
            addr = ', '.join(str(sock.getsockname()) for sock in server.sockets)
            logger.info(f"Server listening on {addr} (WebSocket path {self.config.ws_path})")
            logger.info(f"Serving static assets from {self.config.static_dir}")
            await server.serve_forever()


def build_parser() -> argparse.ArgumentParser:
    env = ServerConfig.from_env()
    parser = argparse.ArgumentParser(description='Nebula Chat relay server')
    parser.add_argument('--host', type=str, default=env.host,
                        help=f'Host to bind to (default: {DEFAULT_SERVER_HOST})')
    parser.add_argument('--port', type=int, default=env.port,
                        help=f'Port for HTTP and WebSocket traffic (default: {DEFAULT_PORT})')
    parser.add_argument('--static-dir', type=str, default=str(env.static_dir),
                        help='Directory of static client assets (default: bundled assets)')
    parser.add_argument('--ws-path', type=str, default=DEFAULT_WS_PATH,
                        help=f'WebSocket endpoint path (default: {DEFAULT_WS_PATH})')
    parser.add_argument('--log-level', type=str, default=os.environ.get('NEBULA_LOG_LEVEL', 'INFO'),
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Log level (default: INFO)')
    parser.add_argument('--log-file', type=str, default=None,
                        help='Also write logs to this file')
    return parser


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logger.configure(getattr(logging, args.log_level), args.log_file)

    config = ServerConfig(
        host=args.host,
        port=args.port,
        static_dir=args.static_dir,
        ws_path=args.ws_path
    )
    server = RelayServer(config)

    try:
        asyncio.run(server.start())
    except KeyboardInterrupt:
        logger.info("Server shutting down...")
    except OSError as e:
        logger.log_error("server", e)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
