# Copyright (c) The contenttype Authors.
# See LICENSE for details.
from collections import abc
from types import MappingProxyType
from typing import Any, Mapping, Optional

import attr

from contenttype._grammar import is_media_type, is_token, quote, scan
from contenttype.errors import InvalidArgument
from contenttype.source import content_type_from_source


def _frozen_parameters(
    parameters: Optional[Mapping[str, str]]
) -> Mapping[str, str]:
    return MappingProxyType(dict(parameters or {}))


@attr.s(frozen=True, slots=True)
class MediaType:
    """
    A parsed media type.

    :ivar type: The ``type/subtype`` pair. :func:`parse` always produces it
        in lower case.
    :ivar parameters: A read-only mapping of parameter names to values, in
        the order each name first appeared. Quoted values are stored
        decoded.
    """

    type = attr.ib()  # type: str
    parameters = attr.ib(
        factory=dict, converter=_frozen_parameters, hash=False
    )  # type: Mapping[str, str]

    def __str__(self) -> str:
        return format(self)


def parse(value: Any) -> MediaType:
    """
    Parse a ``Content-Type`` header value.

    :param value: The header value as `str` or `bytes` (decoded as
        ISO-8859-1), or an object to read the header from, as accepted by
        :func:`contenttype.source.content_type_from_source`.

    :raises InvalidArgument: *value* is `None` or a number.
    :raises MissingHeader: *value* is an object without a usable
        ``Content-Type`` header.
    :raises InvalidMediaType: The ``type/subtype`` part is malformed.
    :raises InvalidParameterFormat: A parameter clause is malformed.
    """
    if isinstance(value, (bytes, bytearray)):
        value = bytes(value).decode("iso-8859-1")
    elif value is None or isinstance(value, (int, float, complex)):
        raise InvalidArgument(
            "argument string is required, not {!r}".format(value))
    elif not isinstance(value, str):
        value = content_type_from_source(value)

    media_type, parameters = scan(value)
    # Repeated names keep their first position and their last value.
    return MediaType(media_type, dict(parameters))


def format(value: Any) -> str:
    """
    Serialize a media type into a ``Content-Type`` header value.

    The type is written as given, without changing its case. Parameters
    follow in iteration order, their values quoted only when they are not
    tokens.

    :param value: A :class:`MediaType`, any object with ``type`` and
        ``parameters`` attributes, or a mapping with those keys.
        ``parameters`` is optional. `bytes` parameter values are decoded as
        ISO-8859-1, other non-`str` values are converted with `str`.

    :raises InvalidArgument: *value* is missing, its type is not
        ``token/token``, a parameter name is not a token, or a parameter
        value holds characters a header cannot carry.
    """
    if value is None or isinstance(value, (str, bytes, int, float, complex)):
        raise InvalidArgument("argument obj is required")

    if isinstance(value, abc.Mapping):
        media_type = value.get("type")
        parameters = value.get("parameters")
    else:
        media_type = getattr(value, "type", None)
        parameters = getattr(value, "parameters", None)

    if not isinstance(media_type, str) or not is_media_type(media_type):
        raise InvalidArgument("invalid type: {!r}".format(media_type))

    if parameters is None:
        return media_type
    if not isinstance(parameters, abc.Mapping):
        raise InvalidArgument(
            "parameters must be a mapping, not {}".format(type(parameters)))

    header = [media_type]
    for name, parameter in parameters.items():
        if not isinstance(name, str) or not is_token(name):
            raise InvalidArgument("invalid parameter name: {!r}".format(name))
        if isinstance(parameter, (bytes, bytearray)):
            parameter = bytes(parameter).decode("iso-8859-1")
        elif not isinstance(parameter, str):
            parameter = str(parameter)
        header.append("; {}={}".format(name, quote(parameter)))
    return "".join(header)
