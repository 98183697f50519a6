"""
Tag codec for the view factory engine.

Tags exist in two forms:

- typed tags: members of a ``str``-valued ``Enum`` (a closed domain set)
- raw tokens: plain strings, as persisted on a view instance

Conversion to a token is total. Conversion from tokens back to typed tags is
partial: unknown tokens are dropped unless the caller asks for strictness.

Invariants
----------
- Persisted form is the sorted token list joined by single spaces.
- Decoding splits on any whitespace, so decode(encode(S)) == S for any set S of
  tokens without whitespace.
- ``TYPE_LEVEL_TAG`` contains whitespace and therefore never survives a
  decode; it cannot collide with a persisted tag.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Hashable, Iterable, TypeVar, Union

from factory_engine.errors import InvalidTagError, UnknownTagError

logger = logging.getLogger(__name__)

TYPE_LEVEL_TAG = "{{type level}}"

Tag = Union[str, Enum]
TagT = TypeVar("TagT", bound=Hashable)


def tag_token(tag: Tag) -> str:
    """
    Return the raw token for a tag.

    Parameters
    ----------
    tag:
        An enum member (its ``value`` is used) or a plain string.

    Returns
    -------
    str
        Token form of the tag.
    """
    if isinstance(tag, Enum):
        return str(tag.value)
    return str(tag)


def as_tag_set(tags: Tag | Iterable[Tag] | None) -> tuple[Tag, ...]:
    """Normalize a single tag, an iterable of tags or None into a tuple."""
    if tags is None:
        return ()
    if isinstance(tags, (str, Enum)):
        return (tags,)
    return tuple(tags)


def is_valid_token(token: str) -> bool:
    """Return True when ``token`` survives an encode/decode round trip unchanged."""
    return bool(token) and token.split() == [token]


def tokens_for(tags: Tag | Iterable[Tag] | None, *, strict: bool = False) -> frozenset[str]:
    """
    Convert tags to a set of persistable tokens.

    Parameters
    ----------
    tags:
        A single tag, an iterable of tags, or None.
    strict:
        If True, raise on tokens that cannot be persisted. Otherwise a tag
        containing whitespace is split into its words (as it would be after a
        persist and reload) and an empty tag is dropped, both with a warning.

    Returns
    -------
    frozenset[str]
        Whitespace-free tokens.

    Raises
    ------
    InvalidTagError
        If ``strict`` and any token is empty or contains whitespace.
    """
    out: set[str] = set()
    for tag in as_tag_set(tags):
        token = tag_token(tag)
        if not is_valid_token(token):
            if strict:
                raise InvalidTagError(f"Tag {token!r} cannot be persisted as a single token.")
            words = token.split()
            if words:
                logger.warning("Splitting tag %r into tokens %r", token, words)
            else:
                logger.warning("Dropping empty tag token %r", token)
            out.update(words)
            continue
        out.add(token)
    return frozenset(out)


def encode_tokens(tokens: Iterable[str]) -> str:
    """Encode tokens into the persisted, whitespace-joined form."""
    return " ".join(sorted(set(tokens)))


def decode_tokens(text: str | None) -> frozenset[str]:
    """Decode the persisted form into a token set. ``None`` decodes to an empty set."""
    if not text:
        return frozenset()
    return frozenset(text.split())


def parse_tags(
    tokens: Iterable[str],
    tag_type: type[Enum],
    *,
    strict: bool = False,
) -> frozenset[Enum]:
    """
    Convert raw tokens into members of a closed tag enum.

    Parameters
    ----------
    tokens:
        Raw tokens, typically from ``decode_tokens``.
    tag_type:
        Enum class whose member values are the known tokens.
    strict:
        If True, raise on unknown tokens instead of dropping them.

    Returns
    -------
    frozenset[Enum]
        Recognized members.

    Raises
    ------
    UnknownTagError
        If ``strict`` and a token is not a member value of ``tag_type``.
    """
    out: set[Enum] = set()
    for token in tokens:
        try:
            out.add(tag_type(token))
        except ValueError:
            if strict:
                raise UnknownTagError(
                    f"Token {token!r} is not a {tag_type.__name__} value."
                ) from None
            logger.debug("Dropping unknown %s token %r", tag_type.__name__, token)
    return frozenset(out)
