"""
Static asset serving.

Plain HTTP requests that reach the relay port are answered from a static
directory through the WebSocket server's ``process_request`` hook; only
upgrade requests on the WebSocket path continue to the relay.
"""

import mimetypes
from http import HTTPStatus
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlsplit

from websockets.datastructures import Headers
from websockets.http11 import Request, Response

from nebula_common.constants import STATIC_INDEX
from nebula_server.utils.logger import logger


def resolve_static_path(static_dir: Path, request_path: str) -> Optional[Path]:
    """
    Map a request path onto a file inside static_dir.

    Returns None when the file does not exist or the path escapes the root.
    """
    root = Path(static_dir).resolve()
    relative = unquote(urlsplit(request_path).path).lstrip('/')
    if not relative or relative.endswith('/'):
        relative += STATIC_INDEX

    candidate = (root / relative).resolve()
    try:
        candidate.relative_to(root)
    except ValueError:
        return None

    if not candidate.is_file():
        return None
    return candidate


def build_file_response(path: Path) -> Response:
    """Build a 200 response carrying the file's bytes."""
    body = path.read_bytes()
    content_type, _ = mimetypes.guess_type(path.name)
    if content_type is None:
        content_type = 'application/octet-stream'
    elif content_type.startswith('text/'):
        content_type += '; charset=utf-8'

    headers = Headers()
    headers['Content-Type'] = content_type
    headers['Content-Length'] = str(len(body))
    headers['Connection'] = 'close'
    return Response(HTTPStatus.OK.value, HTTPStatus.OK.phrase, headers, body)


def is_websocket_upgrade(request: Request) -> bool:
    return request.headers.get('Upgrade', '').lower() == 'websocket'


class StaticAssetHandler:
    """``process_request`` hook serving files from a directory."""

    def __init__(self, static_dir: Path, ws_path: str):
        self.static_dir = Path(static_dir)
        self.ws_path = ws_path

    def __call__(self, connection, request: Request) -> Optional[Response]:
        path = urlsplit(request.path).path
        if path == self.ws_path and is_websocket_upgrade(request):
            return None

        file_path = resolve_static_path(self.static_dir, request.path)
        if file_path is None:
            logger.log_static(request.path, HTTPStatus.NOT_FOUND.value)
            return connection.respond(HTTPStatus.NOT_FOUND, "Not found\n")

        try:
            response = build_file_response(file_path)
        except OSError as e:
            logger.log_error(f"serving {request.path}", e)
            return connection.respond(HTTPStatus.INTERNAL_SERVER_ERROR, "Internal server error\n")

        logger.log_static(request.path, response.status_code)
        return response
