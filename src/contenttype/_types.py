# Copyright (c) The contenttype Authors.
# See LICENSE for details.
from typing import List, Mapping, Tuple, Union

from twisted.web.http_headers import Headers

_S = Union[bytes, str]

_HeadersType = Union[
    Headers,
    Mapping[_S, _S],
    Mapping[_S, List[_S]],
]
"""
Header carriers understood by the source adapter: Twisted's `Headers` and
plain mappings whose values are either a single value or a list of them.
"""

_ParameterItems = List[Tuple[str, str]]
"""
Parameters in the order they were scanned, duplicates included.
"""
