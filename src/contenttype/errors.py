# Copyright (c) The contenttype Authors.
# See LICENSE for details.
"""
Exceptions raised while parsing, formatting or locating a media type.

Each exception also derives from the closest builtin, so callers that only
care about ``ValueError`` or ``TypeError`` keep working.
"""
from typing import Optional


class ContentTypeError(Exception):
    """
    Base class of every error raised by :mod:`contenttype`.
    """


class InvalidArgument(ContentTypeError, TypeError):
    """
    The input is not a string, nor an object a header could be read from.
    """


class MissingHeader(ContentTypeError, LookupError):
    """
    The header source does not carry a usable ``Content-Type`` value.
    """

    def __init__(self) -> None:
        super(MissingHeader, self).__init__("content-type header is missing")


class _GrammarError(ContentTypeError, ValueError):
    """
    Shared shape of the grammar errors.

    :ivar position: Offset into the OWS-trimmed header value where scanning
        failed, or `None` when the failure is not tied to a character.
    """

    message = "invalid"

    def __init__(self, position: Optional[int] = None) -> None:
        self.position = position
        if position is None:
            detail = self.message
        else:
            detail = "{0} at position {1}".format(self.message, position)
        super(_GrammarError, self).__init__(detail)


class InvalidMediaType(_GrammarError):
    """
    The ``type/subtype`` part is malformed, or characters follow it that
    cannot start another parameter.
    """

    message = "invalid media type"


class InvalidParameterFormat(_GrammarError):
    """
    The media type is fine but one of its ``name=value`` clauses is not.
    """

    message = "invalid parameter format"
