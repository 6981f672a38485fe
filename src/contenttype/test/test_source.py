from unittest import mock

from twisted.python.components import proxyForInterface
from twisted.trial.unittest import SynchronousTestCase
from twisted.web.http_headers import Headers
from twisted.web.http import Request
from twisted.web.iweb import IResponse
from zope.interface import implementer

from contenttype import (IContentTypeSource, MediaType, MissingHeader,
                         content_type_from_source, parse)


@implementer(IResponse)
class _StubResponse:
    code = 200
    phrase = b"OK"
    length = 0

    def __init__(self, headers):
        self.headers = headers


class _HasHeaders:
    def __init__(self, headers):
        self.headers = headers


class _HasGetHeader:
    def __init__(self, value):
        self.value = value
        self.names = []

    def getHeader(self, name):
        self.names.append(name)
        return self.value


@implementer(IContentTypeSource)
class _Source:
    def contentType(self):
        return "text/csv; header=present"


class HeadersTests(SynchronousTestCase):
    def test_headers(self):
        headers = Headers({b"Content-Type": [b"text/html; charset=utf-8"]})
        self.assertEqual(
            content_type_from_source(headers), "text/html; charset=utf-8")

    def test_lastValueWins(self):
        """
        Of repeated headers, the last one is used.
        """
        headers = Headers({"content-type": ["text/plain", "text/html"]})
        self.assertEqual(content_type_from_source(headers), "text/html")

    def test_latin1(self):
        headers = Headers({b"content-type": [b'text/plain; a="\xe9"']})
        self.assertEqual(
            content_type_from_source(headers), 'text/plain; a="\xe9"')

    def test_missing(self):
        self.assertRaises(MissingHeader, content_type_from_source, Headers())

    def test_empty(self):
        headers = Headers({b"content-type": [b""]})
        self.assertRaises(MissingHeader, content_type_from_source, headers)


class HeadersAttributeTests(SynchronousTestCase):
    def test_mapping(self):
        request = _HasHeaders({"content-type": "text/html"})
        self.assertEqual(parse(request), MediaType("text/html"))

    def test_caseInsensitive(self):
        for name in ["Content-Type", "CONTENT-TYPE", b"Content-Type"]:
            request = _HasHeaders({name: "text/html"})
            self.assertEqual(content_type_from_source(request), "text/html")

    def test_listValue(self):
        request = _HasHeaders({b"content-type": [b"text/plain", b"text/html"]})
        self.assertEqual(content_type_from_source(request), "text/html")

    def test_twistedHeaders(self):
        request = _HasHeaders(Headers({b"content-type": [b"text/html"]}))
        self.assertEqual(content_type_from_source(request), "text/html")

    def test_missing(self):
        for headers in [{}, {"content-length": "0"}, {"content-type": None},
                        {"content-type": []}, {"content-type": ""}]:
            self.assertRaises(
                MissingHeader, content_type_from_source, _HasHeaders(headers))

    def test_preferredOverGetHeader(self):
        """
        The ``headers`` mapping is consulted before ``getHeader``.
        """
        source = _HasGetHeader("text/plain")
        source.headers = {"content-type": "text/html"}
        self.assertEqual(content_type_from_source(source), "text/html")
        self.assertEqual(source.names, [])


class GetHeaderTests(SynchronousTestCase):
    def test_getHeader(self):
        response = _HasGetHeader("text/html")
        self.assertEqual(parse(response), MediaType("text/html"))
        self.assertEqual(response.names, ["content-type"])

    def test_bytes(self):
        response = _HasGetHeader(b"text/html")
        self.assertEqual(content_type_from_source(response), "text/html")

    def test_missing(self):
        for value in [None, "", 7]:
            self.assertRaises(
                MissingHeader, content_type_from_source, _HasGetHeader(value))

    def test_notCallable(self):
        source = mock.Mock(spec=["getHeader"])
        source.getHeader = "text/html"
        self.assertRaises(MissingHeader, content_type_from_source, source)


class TwistedSourceTests(SynchronousTestCase):
    def test_request(self):
        request = Request(mock.Mock())
        request.requestHeaders.setRawHeaders(
            b"content-type", [b"application/json; charset=utf-8"])
        self.assertEqual(
            parse(request),
            MediaType("application/json", {"charset": "utf-8"}),
        )

    def test_requestMissing(self):
        self.assertRaises(MissingHeader, parse, Request(mock.Mock()))

    def test_response(self):
        response = _StubResponse(Headers({b"Content-Type": [b"TEXT/HTML"]}))
        self.assertEqual(parse(response), MediaType("text/html"))

    def test_proxiedResponse(self):
        """
        Wrappers that proxy `IResponse`, as HTTP clients commonly return,
        are read through the wrapped headers.
        """
        response = proxyForInterface(IResponse)(
            _StubResponse(Headers({b"Content-Type": [b"text/html"]})))
        self.assertEqual(content_type_from_source(response), "text/html")

    def test_responseMissing(self):
        self.assertRaises(MissingHeader, parse, _StubResponse(Headers()))

    def test_responseWithoutHeaders(self):
        """
        A response whose headers cannot be read has no content type.
        """
        for headers in [None, object(), "text/html"]:
            self.assertRaises(MissingHeader, parse, _StubResponse(headers))

    def test_provider(self):
        """
        Objects providing `IContentTypeSource` are used as they are.
        """
        self.assertEqual(
            parse(_Source()), MediaType("text/csv", {"header": "present"}))


class HeadersKeyTests(SynchronousTestCase):
    def test_headersKey(self):
        """
        A mapping with a ``"headers"`` key is read like an object with a
        ``headers`` attribute.
        """
        source = {"headers": {"content-type": "text/html; charset=utf-8"}}
        self.assertEqual(
            parse(source), MediaType("text/html", {"charset": "utf-8"}))

    def test_twistedHeaders(self):
        source = {"headers": Headers({b"content-type": [b"text/plain"]})}
        self.assertEqual(content_type_from_source(source), "text/plain")

    def test_missing(self):
        for source in [{"headers": {}}, {"headers": None},
                       {"headers": "text/html"},
                       {"content-type": "text/html"}]:
            self.assertRaises(MissingHeader, content_type_from_source, source)


class NoSourceTests(SynchronousTestCase):
    def test_noCapability(self):
        for source in [{}, [], object(), _HasHeaders("text/html")]:
            error = self.assertRaises(
                MissingHeader, content_type_from_source, source)
            self.assertEqual(str(error), "content-type header is missing")
