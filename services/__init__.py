from .compression import load_compressed_page
from .http_server import M8RequestHandler, create_server

__all__ = [
    'load_compressed_page',
    'M8RequestHandler',
    'create_server'
]
