# Copyright (c) The contenttype Authors.
# See LICENSE for details.
from typing import Any, FrozenSet, Optional

from contenttype.errors import MissingHeader
from contenttype.mediatype import parse


"""Characters that are valid in a charset name per RFC 2978.

See https://www.rfc-editor.org/errata/eid5433
"""
_MIME_CHARSET_CHARS: FrozenSet[str] = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"  # ALPHA
    "0123456789"  # DIGIT
    "!#$%&+-^_`~"  # symbols
)


def encoding_from_source(
    source: Any, default: Optional[str] = None
) -> Optional[str]:
    """
    Determine the character encoding announced by a ``Content-Type``.

    :param source: A header value or anything :func:`contenttype.parse`
        reads a header from.
    :param default: Returned when no usable charset is announced.

    :returns: The lower-cased ``charset`` parameter, ``"utf-8"`` for
        ``application/json`` without one, or *default*.

    :raises InvalidMediaType: The header is malformed.
    :raises InvalidParameterFormat: The header is malformed.
    """
    try:
        media_type = parse(source)
    except MissingHeader:
        return default

    charset = media_type.parameters.get("charset")
    if charset:
        # Some senders wrap the name in quotes of their own, inside or
        # instead of a quoted-string.
        charset = charset.strip("'\"").lower()
        if not charset:
            return default
        if not set(charset).issubset(_MIME_CHARSET_CHARS):
            return default
        return charset

    # RFC 8259 (8.1): JSON text exchanged between systems MUST be UTF-8.
    if media_type.type == "application/json":
        return "utf-8"

    return default
