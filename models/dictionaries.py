"""Static tag/attribute token tables shared by compress and decompress"""
from types import MappingProxyType

MAX_TAG_ENTRIES = 50
MAX_ATTRIBUTE_ENTRIES = 11

_TAG_NAMES = (
    'div', 'span', 'p', 'a', 'img', 'h1', 'h2', 'h3', 'h4', 'h5',
    'ul', 'ol', 'li', 'table', 'tr', 'td', 'th', 'header', 'footer', 'nav',
    'section', 'article', 'aside', 'main', 'form', 'input', 'button', 'textarea', 'select', 'option',
    'label', 'script', 'style', 'link', 'meta', 'html', 'head', 'body', 'title', 'br',
    'hr', 'strong', 'em', 'b', 'i', 'u', 'small', 'mark', 'del', 'ins',
)

_ATTRIBUTE_PAIRS = (
    ('class', 'c'), ('id', 'i'), ('style', 's'), ('src', 'r'),
    ('href', 'h'), ('alt', 'a'), ('title', 't'), ('type', 'y'),
    ('name', 'n'), ('value', 'v'), ('placeholder', 'p'),
)


class DictionaryError(ValueError):
    """Raised when the token tables are not a bijection"""


# Forward tables (name -> token)
TAG_TOKENS = MappingProxyType({name: str(i) for i, name in enumerate(_TAG_NAMES, 1)})
ATTRIBUTE_TOKENS = MappingProxyType(dict(_ATTRIBUTE_PAIRS))

# Inverse tables (token -> name), always derived from the forward ones
_invert = lambda table: MappingProxyType({token: name for name, token in table.items()})
TOKEN_TAGS = _invert(TAG_TOKENS)
TOKEN_ATTRIBUTES = _invert(ATTRIBUTE_TOKENS)


def validate_dictionaries(tag_names=_TAG_NAMES, attribute_pairs=_ATTRIBUTE_PAIRS) -> None:
    """
    Check that both tables are bijective and their tokens are unambiguous.

    Tag tokens must not start with a letter so they can never be mistaken
    for (a prefix of) a real tag name; attribute tokens are single
    lowercase letters.

    Raises:
        DictionaryError: on the first violated invariant
    """
    if len(tag_names) > MAX_TAG_ENTRIES:
        raise DictionaryError(f"Too many tag entries: {len(tag_names)} > {MAX_TAG_ENTRIES}")
    if len(set(tag_names)) != len(tag_names):
        raise DictionaryError("Duplicate tag name in tag dictionary")

    tag_tokens = [str(i) for i in range(1, len(tag_names) + 1)]
    for name, token in zip(tag_names, tag_tokens):
        if name != name.lower():
            raise DictionaryError(f"Tag name must be lowercase: {name!r}")
        if token[0].isalpha():
            raise DictionaryError(f"Tag token {token!r} could be read as a tag name")

    if len(attribute_pairs) > MAX_ATTRIBUTE_ENTRIES:
        raise DictionaryError(f"Too many attribute entries: {len(attribute_pairs)} > {MAX_ATTRIBUTE_ENTRIES}")
    names = [name for name, _ in attribute_pairs]
    tokens = [token for _, token in attribute_pairs]
    if len(set(names)) != len(names):
        raise DictionaryError("Duplicate attribute name in attribute dictionary")
    if len(set(tokens)) != len(tokens):
        raise DictionaryError("Duplicate attribute token in attribute dictionary")
    for name, token in attribute_pairs:
        if len(token) != 1 or not token.isalpha() or not token.islower():
            raise DictionaryError(f"Attribute token for {name!r} must be one lowercase letter, got {token!r}")


validate_dictionaries()
