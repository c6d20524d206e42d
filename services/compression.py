"""
Thin service layer answering .m8 requests.

A cached name.m8 is served verbatim; otherwise name.source.html is
compressed on demand and the result carries its size metrics.
"""

from typing import Optional

from config import DEBUG_LOGS_ENABLED
from models.enums import PayloadOrigin
from models.schemas import CompressedPage
from repositories import ArtifactNotFoundError, ArtifactRepository
from utils.debug_logger import DebugLogger, get_logger
from utils.html_compressor import compress_to_m8, measure


def load_compressed_page(repo: ArtifactRepository, url_path: str,
                         logger: Optional[DebugLogger] = None) -> CompressedPage:
    """
    Resolve the .m8 payload for a compressed-resource URL path.

    Args:
        repo: Artifact storage
        url_path: Request path ending in the compressed extension
        logger: Debug log sink; defaults to the shared logger when debug logs are on

    Returns:
        CompressedPage (stats set only when compressed on demand)

    Raises:
        ArtifactNotFoundError: neither name.m8 nor name.source.html exists;
            the error names the source path searched
        ArtifactReadError: an artifact exists but can't be read
    """
    compressed_path = repo.resolve(url_path)

    if repo.exists(compressed_path):
        page = CompressedPage(path=str(compressed_path), body=repo.read_text(compressed_path),
                              origin=PayloadOrigin.CACHED)
    else:
        source_path = repo.source_path_for(compressed_path)
        if not repo.exists(source_path):
            raise ArtifactNotFoundError(source_path)
        html = repo.read_text(source_path)
        m8 = compress_to_m8(html)
        page = CompressedPage(path=str(source_path), body=m8,
                              origin=PayloadOrigin.COMPRESSED_ON_DEMAND, stats=measure(html, m8))

    if logger is None and DEBUG_LOGS_ENABLED:
        logger = get_logger()
    if logger is not None:
        try:
            logger.log_compression(url_path, page.origin.value, page.stats)
        except OSError as e:
            print(f"[DEBUG] Could not write compression log for {url_path}: {e}")
    return page
