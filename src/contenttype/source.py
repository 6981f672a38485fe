# Copyright (c) The contenttype Authors.
# See LICENSE for details.
"""
Read the raw ``Content-Type`` header from request-like and response-like
objects.

Twisted's own header carriers are handled through registered adapters.
Anything else is accepted if it has a ``headers`` mapping (an attribute,
or a key of a mapping) or a ``getHeader`` method, checked in that order.
"""
from collections import abc
from typing import Any, Callable, Optional

from twisted.logger import Logger
from twisted.python.components import registerAdapter
from twisted.web.http_headers import Headers
from twisted.web.iweb import IRequest, IResponse
from zope.interface import Interface, implementer

from contenttype._types import _S, _HeadersType
from contenttype.errors import MissingHeader

_log = Logger()


class IContentTypeSource(Interface):
    """
    An object a raw ``Content-Type`` header value can be read from.
    """

    def contentType() -> Optional[_S]:
        """
        :returns: The raw header value, or `None` if there is none.
        """


def _last_value(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return value[-1] if value else None
    return value


@implementer(IContentTypeSource)
class _HeadersSource:
    """
    Read the header from :class:`twisted.web.http_headers.Headers`.
    """

    def __init__(self, headers: Headers) -> None:
        self._headers = headers

    def contentType(self) -> Optional[_S]:
        # This seems to be the choice browsers make when encountering
        # multiple content-type headers.
        return _last_value(self._headers.getRawHeaders(b"content-type"))


@implementer(IContentTypeSource)
class _MappingSource:
    """
    Read the header from a plain mapping, ignoring the case of its keys.
    """

    def __init__(self, headers: abc.Mapping) -> None:
        self._headers = headers

    def contentType(self) -> Optional[_S]:
        value = None
        for name, candidate in self._headers.items():
            if isinstance(name, bytes):
                name = name.decode("iso-8859-1")
            if isinstance(name, str) and name.lower() == "content-type":
                value = candidate
        return _last_value(value)


@implementer(IContentTypeSource)
class _ResponseSource:
    def __init__(self, response: IResponse) -> None:
        self._response = response

    def contentType(self) -> Optional[_S]:
        headers = IContentTypeSource(self._response.headers, None)
        if headers is None:
            return None
        return headers.contentType()


@implementer(IContentTypeSource)
class _HeaderAccessorSource:
    """
    Read the header through a ``getHeader(name)`` callable, which is what
    :class:`twisted.web.iweb.IRequest` providers and many response objects
    offer.
    """

    def __init__(self, getHeader: Callable[[str], Any]) -> None:
        self._getHeader = getHeader

    def contentType(self) -> Optional[_S]:
        return self._getHeader("content-type")


def _request_source(request: IRequest) -> _HeaderAccessorSource:
    return _HeaderAccessorSource(request.getHeader)


registerAdapter(_HeadersSource, Headers, IContentTypeSource)
registerAdapter(_ResponseSource, IResponse, IContentTypeSource)
registerAdapter(_request_source, IRequest, IContentTypeSource)


def _headers_source(headers: _HeadersType) -> IContentTypeSource:
    if isinstance(headers, Headers):
        return _HeadersSource(headers)
    return _MappingSource(headers)


def _source_for(source: Any) -> Optional[IContentTypeSource]:
    adapted = IContentTypeSource(source, None)
    if adapted is not None:
        return adapted

    if isinstance(source, abc.Mapping):
        headers = source.get("headers")
    else:
        headers = getattr(source, "headers", None)
    if isinstance(headers, (Headers, abc.Mapping)):
        return _headers_source(headers)

    getHeader = getattr(source, "getHeader", None)
    if callable(getHeader):
        return _HeaderAccessorSource(getHeader)

    return None


def content_type_from_source(source: Any) -> str:
    """
    Find the raw ``Content-Type`` header value of *source*.

    :param source: A :class:`~twisted.web.http_headers.Headers`, a
        :class:`~twisted.web.iweb.IResponse` or
        :class:`~twisted.web.iweb.IRequest` provider, an
        :class:`IContentTypeSource` provider, any object with a
        ``headers`` mapping or a ``getHeader`` method, or a mapping with a
        ``"headers"`` key.

    :returns: The header value; `bytes` are decoded as ISO-8859-1.

    :raises MissingHeader: *source* offers no way to read the header, or
        the header is absent or empty.
    """
    adapted = _source_for(source)
    if adapted is None:
        _log.debug(
            "Cannot read a content-type header from {source!r}",
            source=source,
        )
        raise MissingHeader()

    value = adapted.contentType()
    if isinstance(value, bytes):
        value = value.decode("iso-8859-1")
    if not isinstance(value, str) or not value:
        _log.debug(
            "No content-type header on {source!r}, got {value!r}",
            source=source,
            value=value,
        )
        raise MissingHeader()
    return value
