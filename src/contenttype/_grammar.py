# Copyright (c) The contenttype Authors.
# See LICENSE for details.
"""
The media type grammar of :rfc:`9110#section-8.3.1`::

    media-type      = type "/" subtype parameters
    parameters      = *( OWS ";" OWS parameter )
    parameter       = parameter-name "=" parameter-value
    parameter-value = ( token / quoted-string )

A parameter is required after every ``;``. OWS is also accepted around
``=``.
"""
from enum import Enum
from typing import (Callable, Dict, FrozenSet, List, NoReturn, Optional, Tuple,
                    Type)

from contenttype._types import _ParameterItems
from contenttype.errors import (InvalidArgument, InvalidMediaType,
                                InvalidParameterFormat, _GrammarError)

"""Characters allowed in a token (``tchar``)."""
_TOKEN_CHARS: FrozenSet[str] = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"  # ALPHA
    "0123456789"  # DIGIT
    "!#$%&'*+-.^_`|~"  # symbols
)

_OWS_CHARS = " \t"

"""Optional whitespace: SP and HTAB, nothing else."""
_OWS: FrozenSet[str] = frozenset(_OWS_CHARS)


def _is_qdtext(char: str) -> bool:
    code = ord(char)
    return (
        char == "\t"
        or (0x20 <= code <= 0x7E and char not in '"\\')
        or 0x80 <= code <= 0xFF
    )


def _is_quotable(char: str) -> bool:
    """
    Whether *char* may follow a backslash in a quoted-pair.
    """
    return 0x01 <= ord(char) <= 0xFF and char not in "\r\n"


def is_token(value: str) -> bool:
    return bool(value) and set(value).issubset(_TOKEN_CHARS)


def is_media_type(value: str) -> bool:
    """
    Whether *value* is a bare ``type "/" subtype``, in any case.
    """
    type_, slash, subtype = value.partition("/")
    return bool(slash) and is_token(type_) and is_token(subtype)


def quote(value: str) -> str:
    """
    Render a parameter value, quoting it only when it is not a token.

    Backslash and double quote are escaped, as are the characters which
    are not ``qdtext`` but may appear in a quoted-pair (control characters
    and DEL), so the result always scans back to *value*.

    :raises InvalidArgument: *value* holds NUL, CR, LF or a character above
        U+00FF, none of which a header can carry.
    """
    if is_token(value):
        return value

    quoted = ['"']
    for char in value:
        if _is_qdtext(char):
            quoted.append(char)
        elif _is_quotable(char):
            quoted.append("\\" + char)
        else:
            raise InvalidArgument("invalid parameter value")
    quoted.append('"')
    return "".join(quoted)


class _State(Enum):
    EXPECT_TYPE_TOKEN = "expect type token"
    EXPECT_SLASH = "expect slash"
    EXPECT_SUBTYPE_TOKEN = "expect subtype token"
    IN_SUBTYPE_TOKEN = "in subtype token"
    EXPECT_PARAM_SEPARATOR_OR_END = "expect parameter separator or end"
    EXPECT_PARAM_NAME = "expect parameter name"
    IN_PARAM_NAME = "in parameter name"
    EXPECT_EQUALS = "expect equals"
    EXPECT_PARAM_VALUE_OR_QUOTE = "expect parameter value or quote"
    IN_TOKEN_VALUE = "in token value"
    AFTER_TOKEN_VALUE = "after token value"
    IN_QUOTED_VALUE = "in quoted value"
    IN_ESCAPE_SEQUENCE = "in escape sequence"


_MEDIA_TYPE_STATES: FrozenSet[_State] = frozenset([
    _State.EXPECT_TYPE_TOKEN,
    _State.EXPECT_SLASH,
    _State.EXPECT_SUBTYPE_TOKEN,
    _State.IN_SUBTYPE_TOKEN,
    _State.EXPECT_PARAM_SEPARATOR_OR_END,
])

_ACCEPTING_STATES: FrozenSet[_State] = frozenset([
    _State.IN_SUBTYPE_TOKEN,
    _State.EXPECT_PARAM_SEPARATOR_OR_END,
    _State.IN_TOKEN_VALUE,
    _State.AFTER_TOKEN_VALUE,
])


class _Scanner:
    """
    Scan a media type one character at a time.

    Every state handler returns the next state, or `None` when the
    character is not allowed there. Failing in one of the
    `_MEDIA_TYPE_STATES` raises `InvalidMediaType`; failing anywhere in a
    parameter clause raises `InvalidParameterFormat`.

    :ivar parameters: ``(name, value)`` pairs in the order they were
        scanned, names lower-cased and quoted values decoded.
    """

    def __init__(self) -> None:
        self.state = _State.EXPECT_TYPE_TOKEN
        self.parameters: _ParameterItems = []
        self._type: List[str] = []
        self._name: List[str] = []
        self._value: List[str] = []
        self._handlers: Dict[_State, Callable[[str], Optional[_State]]] = {
            _State.EXPECT_TYPE_TOKEN: self._expect_type_token,
            _State.EXPECT_SLASH: self._expect_slash,
            _State.EXPECT_SUBTYPE_TOKEN: self._expect_subtype_token,
            _State.IN_SUBTYPE_TOKEN: self._in_subtype_token,
            _State.EXPECT_PARAM_SEPARATOR_OR_END: self._expect_separator,
            _State.EXPECT_PARAM_NAME: self._expect_param_name,
            _State.IN_PARAM_NAME: self._in_param_name,
            _State.EXPECT_EQUALS: self._expect_equals,
            _State.EXPECT_PARAM_VALUE_OR_QUOTE: self._expect_param_value,
            _State.IN_TOKEN_VALUE: self._in_token_value,
            _State.AFTER_TOKEN_VALUE: self._after_token_value,
            _State.IN_QUOTED_VALUE: self._in_quoted_value,
            _State.IN_ESCAPE_SEQUENCE: self._in_escape_sequence,
        }

    @property
    def media_type(self) -> str:
        return "".join(self._type).lower()

    def scan(self, text: str) -> None:
        for position, char in enumerate(text):
            state = self._handlers[self.state](char)
            if state is None:
                self._fail(position)
            self.state = state
        if self.state not in _ACCEPTING_STATES:
            self._fail(len(text))
        if self.state is _State.IN_TOKEN_VALUE:
            self._commit()

    def _fail(self, position: int) -> NoReturn:
        error: Type[_GrammarError]
        if self.state in _MEDIA_TYPE_STATES:
            error = InvalidMediaType
        else:
            error = InvalidParameterFormat
        raise error(position)

    def _commit(self) -> None:
        self.parameters.append(
            ("".join(self._name).lower(), "".join(self._value)))

    def _expect_type_token(self, char: str) -> Optional[_State]:
        if char in _TOKEN_CHARS:
            self._type.append(char)
            return _State.EXPECT_SLASH
        return None

    def _expect_slash(self, char: str) -> Optional[_State]:
        if char in _TOKEN_CHARS:
            self._type.append(char)
            return _State.EXPECT_SLASH
        if char == "/":
            self._type.append(char)
            return _State.EXPECT_SUBTYPE_TOKEN
        return None

    def _expect_subtype_token(self, char: str) -> Optional[_State]:
        if char in _TOKEN_CHARS:
            self._type.append(char)
            return _State.IN_SUBTYPE_TOKEN
        return None

    def _in_subtype_token(self, char: str) -> Optional[_State]:
        if char in _TOKEN_CHARS:
            self._type.append(char)
            return _State.IN_SUBTYPE_TOKEN
        return self._expect_separator(char)

    def _expect_separator(self, char: str) -> Optional[_State]:
        if char in _OWS:
            return _State.EXPECT_PARAM_SEPARATOR_OR_END
        if char == ";":
            return _State.EXPECT_PARAM_NAME
        return None

    def _expect_param_name(self, char: str) -> Optional[_State]:
        if char in _OWS:
            return _State.EXPECT_PARAM_NAME
        if char in _TOKEN_CHARS:
            self._name = [char]
            return _State.IN_PARAM_NAME
        return None

    def _in_param_name(self, char: str) -> Optional[_State]:
        if char in _TOKEN_CHARS:
            self._name.append(char)
            return _State.IN_PARAM_NAME
        return self._expect_equals(char)

    def _expect_equals(self, char: str) -> Optional[_State]:
        if char in _OWS:
            return _State.EXPECT_EQUALS
        if char == "=":
            return _State.EXPECT_PARAM_VALUE_OR_QUOTE
        return None

    def _expect_param_value(self, char: str) -> Optional[_State]:
        if char in _OWS:
            return _State.EXPECT_PARAM_VALUE_OR_QUOTE
        if char == '"':
            self._value = []
            return _State.IN_QUOTED_VALUE
        if char in _TOKEN_CHARS:
            self._value = [char]
            return _State.IN_TOKEN_VALUE
        return None

    def _in_token_value(self, char: str) -> Optional[_State]:
        if char in _TOKEN_CHARS:
            self._value.append(char)
            return _State.IN_TOKEN_VALUE
        if char in _OWS:
            self._commit()
            return _State.AFTER_TOKEN_VALUE
        if char == ";":
            self._commit()
            return _State.EXPECT_PARAM_NAME
        return None

    def _after_token_value(self, char: str) -> Optional[_State]:
        # Still inside the unquoted value region: anything but OWS or the
        # next separator makes the value itself malformed.
        if char in _OWS:
            return _State.AFTER_TOKEN_VALUE
        if char == ";":
            return _State.EXPECT_PARAM_NAME
        return None

    def _in_quoted_value(self, char: str) -> Optional[_State]:
        if char == '"':
            self._commit()
            return _State.EXPECT_PARAM_SEPARATOR_OR_END
        if char == "\\":
            return _State.IN_ESCAPE_SEQUENCE
        if _is_qdtext(char):
            self._value.append(char)
            return _State.IN_QUOTED_VALUE
        return None

    def _in_escape_sequence(self, char: str) -> Optional[_State]:
        if _is_quotable(char):
            self._value.append(char)
            return _State.IN_QUOTED_VALUE
        return None


def scan(raw: str) -> Tuple[str, _ParameterItems]:
    """
    Check *raw* against the media type grammar and take it apart.

    Surrounding OWS is ignored; error positions count from the first
    character after it.

    :returns: The lower-cased ``type/subtype`` and the list of parameters,
        duplicates included.

    :raises InvalidMediaType: The ``type/subtype`` part is malformed, or is
        followed by something other than a parameter.
    :raises InvalidParameterFormat: A parameter clause is malformed.
    """
    scanner = _Scanner()
    scanner.scan(raw.strip(_OWS_CHARS))
    return scanner.media_type, scanner.parameters


def validate(raw: str) -> bool:
    """
    Whether *raw* is a well-formed media type, parameters included.

    :raises InvalidArgument: *raw* is not a `str`.
    """
    if not isinstance(raw, str):
        raise InvalidArgument(
            "argument string is required, not {!r}".format(type(raw)))
    try:
        scan(raw)
    except _GrammarError:
        return False
    return True
