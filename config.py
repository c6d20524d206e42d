import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Server
SERVER_HOST = os.getenv('M8_HOST', '127.0.0.1')
SERVER_PORT = int(os.getenv('M8_PORT', '3000'))
CONTENT_ROOT = Path(os.getenv('M8_CONTENT_ROOT', '.'))

# Artifact naming: name.source.html -> name.m8, viewed as name.html
VIEWER_EXTENSION = '.html'
COMPRESSED_EXTENSION = '.m8'
SOURCE_SUFFIX = '.source.html'
DEFAULT_PAGE = 'index'

# Static assets
MIME_TYPES = {
    '.css': 'text/css',
    '.js': 'application/javascript',
    '.json': 'application/json',
    '.png': 'image/png',
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.gif': 'image/gif',
    '.svg': 'image/svg+xml',
    '.ico': 'image/x-icon',
    '.webp': 'image/webp',
    '.txt': 'text/plain',
}
DEFAULT_MIME_TYPE = 'application/octet-stream'

# Debug logs (JSON records of each compression/generation run)
DEBUG_LOGS_ENABLED = os.getenv('M8_DEBUG_LOGS', 'false').lower() == 'true'
DEBUG_LOG_DIR = os.getenv('M8_DEBUG_LOG_DIR', 'debug_logs')

# HTTP Settings (generator input fetched from a URL)
REQUEST_TIMEOUT = int(os.getenv('M8_REQUEST_TIMEOUT', '10'))  # seconds
USER_AGENT = 'Mozilla/5.0 (compatible; m8-generator/1.0)'
