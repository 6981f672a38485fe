from contenttype._grammar import validate
from contenttype.content import encoding_from_source
from contenttype.errors import (ContentTypeError, InvalidArgument,
                                InvalidMediaType, InvalidParameterFormat,
                                MissingHeader)
from contenttype.mediatype import MediaType, format, parse
from contenttype.source import IContentTypeSource, content_type_from_source

from ._version import __version__ as _version

__version__: str = _version.base()

__all__ = [
    "parse",
    "format",
    "validate",
    "MediaType",
    "encoding_from_source",
    "IContentTypeSource",
    "content_type_from_source",
    "ContentTypeError",
    "InvalidArgument",
    "MissingHeader",
    "InvalidMediaType",
    "InvalidParameterFormat",
]
