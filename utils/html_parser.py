from bs4 import BeautifulSoup, Tag
from typing import List, Tuple

# (tag name, ((attribute, value), ...)) for each element in document order
TagSignature = Tuple[str, Tuple[Tuple[str, str], ...]]

_soup = lambda html: BeautifulSoup(html, 'html.parser', multi_valued_attributes=None)
_normalize_space = lambda text: ' '.join(text.split())


def tag_structure(html: str) -> List[TagSignature]:
    """
    Flatten a document into its element sequence.

    Args:
        html: Raw HTML string

    Returns:
        One (name, sorted attributes) entry per element, in document order
    """
    return [
        (element.name, tuple(sorted((name, str(value)) for name, value in element.attrs.items())))
        for element in _soup(html).find_all(True)
        if isinstance(element, Tag)
    ]


def text_content(html: str) -> str:
    """Visible text with whitespace runs collapsed to single spaces"""
    return _normalize_space(_soup(html).get_text(' '))


def same_structure(original: str, restored: str) -> bool:
    """True when both documents have the same elements, attributes and text.

    Whitespace differences are ignored, since removing whitespace between
    tags is the one change a round trip is allowed to make.
    """
    return (tag_structure(original) == tag_structure(restored)
            and text_content(original) == text_content(restored))
