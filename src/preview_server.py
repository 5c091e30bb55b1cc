"""
Preview Server - Serve a rendered document over HTTP for viewing in a browser
"""

import logging
import socket

from sanic import Sanic, response
from sanic.request import Request

logger = logging.getLogger(__name__)

HOST = "127.0.0.1"
DEFAULT_PORT_START = 8000


def find_free_port(start_port=DEFAULT_PORT_START, max_attempts=100, host=HOST):
    """Find an available port starting from start_port"""
    for port in range(start_port, start_port + max_attempts):
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
                sock.bind((host, port))
                return port
        except OSError:
            continue

    raise RuntimeError(f"No available ports found in range {start_port} to {start_port + max_attempts}")


def make_index_handler(document: str):
    """Route handler returning the rendered document"""

    async def index(_request: Request):
        return response.html(document)

    return index


def create_preview_app(document: str, name: str = "AnsiHtmlPreview") -> Sanic:
    """Sanic app serving the document at / and /index.html"""
    app = Sanic(name)
    app.config.AUTO_RELOAD = False
    app.config.ACCESS_LOG = False

    handler = make_index_handler(document)
    app.add_route(handler, "/", methods=["GET"], name="index")
    app.add_route(handler, "/index.html", methods=["GET"], name="index_html")
    return app


def serve_document(document: str, host: str = HOST, port: int = None):
    """Serve the document until interrupted"""
    port = port or find_free_port(host=host)
    app = create_preview_app(document)
    logger.info(f"Serving preview at http://{host}:{port}/")
    app.run(host=host, port=port, single_process=True, motd=False)
