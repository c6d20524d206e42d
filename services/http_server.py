"""
On-demand .m8 server.

name.html  -> generic loader page (fetches name.m8 and expands it in the browser)
name.m8    -> cached payload, or name.source.html compressed on demand
other      -> static file, content type from its extension
"""

import os
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Dict, Optional
from urllib.parse import unquote, urlsplit

from config import (
    COMPRESSED_EXTENSION, DEBUG_LOGS_ENABLED, DEFAULT_MIME_TYPE, DEFAULT_PAGE, MIME_TYPES,
    VIEWER_EXTENSION
)
from models.enums import ResourceKind
from repositories import ArtifactNotFoundError, ArtifactReadError, ArtifactRepository
from services.compression import load_compressed_page
from utils.debug_logger import get_logger
from utils.script_builder import build_loader_page
from utils.workflow_observer import ConsoleObserver, RequestObserver

_TEXT_PLAIN = 'text/plain; charset=utf-8'

content_type_for = lambda path: MIME_TYPES.get(Path(path).suffix.lower(), DEFAULT_MIME_TYPE)


def normalize_request_path(raw_path: str) -> str:
    """Drop the query string, percent-decode, and map directory paths to their index page."""
    path = unquote(urlsplit(raw_path).path) or '/'
    if path.endswith('/'):
        path += DEFAULT_PAGE + VIEWER_EXTENSION
    return path


def classify_path(path: str) -> ResourceKind:
    ext = os.path.splitext(path)[1].lower()
    if ext == VIEWER_EXTENSION:
        return ResourceKind.VIEWER
    if ext == COMPRESSED_EXTENSION:
        return ResourceKind.COMPRESSED
    return ResourceKind.STATIC


class M8Server(ThreadingHTTPServer):
    """HTTP server bound to one content root"""
    daemon_threads = True

    def __init__(self, address, repository: ArtifactRepository, observer: RequestObserver):
        self.repository = repository
        self.observer = observer
        self.loader_page = build_loader_page().encode('utf-8')
        # One logger, and so one run dir, shared by every handler thread
        self.debug_logger = get_logger() if DEBUG_LOGS_ENABLED else None
        super().__init__(address, M8RequestHandler)


class M8RequestHandler(BaseHTTPRequestHandler):
    server_version = 'm8-server/1.0'

    def do_GET(self):
        self._handle(send_body=True)

    def do_HEAD(self):
        self._handle(send_body=False)

    def log_message(self, format, *args):
        # Requests are reported through the observer
        pass

    def _send(self, status: int, content_type: str, body: bytes, send_body: bool,
              headers: Optional[Dict[str, str]] = None):
        self.send_response(status)
        self.send_header('Content-Type', content_type)
        self.send_header('Content-Length', str(len(body)))
        for name, value in (headers or {}).items():
            self.send_header(name, value)
        self.end_headers()
        if send_body:
            self.wfile.write(body)

    def _handle(self, send_body: bool):
        server = self.server
        observer = server.observer
        path = normalize_request_path(self.path)
        observer.on_request(self.command, self.path, path)

        kind = classify_path(path)
        observer.on_routed(kind, path)

        try:
            if kind == ResourceKind.VIEWER:
                self._send(200, 'text/html; charset=utf-8', server.loader_page, send_body)
            elif kind == ResourceKind.COMPRESSED:
                page = load_compressed_page(server.repository, path, server.debug_logger)
                observer.on_payload(page)
                self._send(200, _TEXT_PLAIN, page.body.encode('utf-8'), send_body, page.headers())
            else:
                file_path = server.repository.resolve(path)
                data = server.repository.read_bytes(file_path)
                self._send(200, content_type_for(file_path), data, send_body)
        except ArtifactNotFoundError as e:
            observer.on_not_found(e.path)
            message = (f"404 - .m8 or source HTML file not found\n\nExpected: {e.path}"
                       if kind == ResourceKind.COMPRESSED
                       else f"404 - File not found\n\nSearched: {e.path}")
            self._send(404, _TEXT_PLAIN, message.encode('utf-8'), send_body)
        except ArtifactReadError as e:
            observer.on_error(e.path, e.message)
            self._send(500, _TEXT_PLAIN, f"500 - Error reading {e.path}\n\n{e.message}".encode('utf-8'), send_body)


def create_server(root_dir, host: str = '127.0.0.1', port: int = 3000,
                  observer: Optional[RequestObserver] = None) -> M8Server:
    """
    Build (but don't start) a server for the given content root.

    Args:
        root_dir: Directory holding *.source.html, *.m8 and static assets
        host: Bind address
        port: Bind port (0 picks a free one)
        observer: Request event sink, ConsoleObserver by default

    Returns:
        M8Server; call serve_forever() to run it
    """
    return M8Server((host, port), ArtifactRepository(root_dir), observer or ConsoleObserver())
