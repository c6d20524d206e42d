"""HTML <-> .m8 substitution codec"""
import re
from typing import Mapping

from models.dictionaries import ATTRIBUTE_TOKENS, TAG_TOKENS, TOKEN_ATTRIBUTES, TOKEN_TAGS
from models.schemas import CompressionStats

# Tag names are ASCII word characters right after '<' or '</'
_INTER_TAG_WHITESPACE = re.compile(r'>\s+<')
_OPENING_TAG = re.compile(r'<(\w+)([^>]*)>', re.ASCII)
_CLOSING_TAG = re.compile(r'</(\w+)>', re.ASCII)

_byte_length = lambda text: len(text.encode('utf-8'))


def _attribute_pattern(table: Mapping[str, str]) -> re.Pattern:
    names = '|'.join(re.escape(name) for name in table)
    return re.compile(rf'(\s)({names})=')


# Precompiled for the two shared tables
_ATTRIBUTE_PATTERNS = {id(table): _attribute_pattern(table) for table in (ATTRIBUTE_TOKENS, TOKEN_ATTRIBUTES)}


def collapse_whitespace_between_tags(html: str) -> str:
    """Drop whitespace sitting strictly between a '>' and the next '<'."""
    return _INTER_TAG_WHITESPACE.sub('><', html)


def substitute_attribute_names(attrs: str, table: Mapping[str, str]) -> str:
    """
    Rewrite every "whitespace + name + =" in the attribute text of one tag.

    The whitespace character before the name is kept as-is. Names missing
    from `table` are left untouched.
    """
    if not attrs or not table:
        return attrs
    pattern = _ATTRIBUTE_PATTERNS.get(id(table)) or _attribute_pattern(table)
    return pattern.sub(lambda m: f"{m.group(1)}{table[m.group(2)]}=", attrs)


def substitute_tag_names(text: str, tag_table: Mapping[str, str],
                         attribute_table: Mapping[str, str], fold_case: bool = False) -> str:
    """
    Rewrite tag names of opening and closing constructs via `tag_table`.

    Args:
        text: Markup text
        tag_table: name -> replacement lookup
        attribute_table: passed to substitute_attribute_names for opening tags
        fold_case: look names up lowercased (compress side)

    Returns:
        Text with known names replaced; unknown names pass through unchanged
    """
    lookup = (lambda name: tag_table.get(name.lower(), name)) if fold_case else (lambda name: tag_table.get(name, name))

    text = _OPENING_TAG.sub(
        lambda m: f"<{lookup(m.group(1))}{substitute_attribute_names(m.group(2), attribute_table)}>",
        text
    )
    return _CLOSING_TAG.sub(lambda m: f"</{lookup(m.group(1))}>", text)


def compress_to_m8(html: str) -> str:
    """
    Compress HTML to .m8 text.

    Removes inter-tag whitespace, then swaps known tag names for numeric
    tokens and known attribute names for single-letter tokens. Total over
    any string: constructs that don't match pass through unmodified.

    Args:
        html: Raw HTML string

    Returns:
        .m8 text (only meaningful together with the token tables)
    """
    if not html:
        return html
    collapsed = collapse_whitespace_between_tags(html)
    return substitute_tag_names(collapsed, TAG_TOKENS, ATTRIBUTE_TOKENS, fold_case=True)


def decompress_m8(m8: str) -> str:
    """
    Expand .m8 text back into HTML.

    Inverse of compress_to_m8's substitutions. Removed inter-tag whitespace
    is not restored. Names that aren't tokens are assumed to be literal and
    pass through.
    """
    if not m8:
        return m8
    return substitute_tag_names(m8, TOKEN_TAGS, TOKEN_ATTRIBUTES)


def measure(original: str, compressed: str) -> CompressionStats:
    """UTF-8 byte sizes of both forms."""
    return CompressionStats(original_size=_byte_length(original),
                            compressed_size=_byte_length(compressed))
