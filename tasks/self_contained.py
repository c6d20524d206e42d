from models.schemas import SelfContainedResult
from utils.html_compressor import compress_to_m8, decompress_m8, measure
from utils.html_parser import same_structure
from utils.script_builder import build_self_contained_page, extract_embedded_payload

_byte_length = lambda text: len(text.encode('utf-8'))


def generate_self_contained(original_html: str) -> SelfContainedResult:
    """
    Compress a document and wrap it in a self-extracting HTML page.

    Returns:
        SelfContainedResult with the page and its size metrics
    """
    compressed = compress_to_m8(original_html)
    page = build_self_contained_page(compressed)
    return SelfContainedResult(html=page, stats=measure(original_html, compressed),
                               self_contained_size=_byte_length(page))


def verify_self_contained(original_html: str, page: str) -> bool:
    """
    Check a generated page reproduces the original document.

    The embedded literal must unescape to exactly compress_to_m8(original),
    and expanding it must give the same elements, attributes and text.
    """
    payload = extract_embedded_payload(page)
    if payload is None or payload != compress_to_m8(original_html):
        return False
    return same_structure(original_html, decompress_m8(payload))
