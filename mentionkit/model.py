# Mentionkit project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Values produced by the mention scanner, and accepted by formatters.


Mention kinds
-------------

Every mention is one of a closed set of frozen dataclasses. All of them derive
from :class:`MentionKind`, and each reports its tag via :attr:`MentionKind.type`::

    >>> User(80351110224678912).type
    <MentionType.USER: 'user'>
    >>> str(Emoji(41771983429993937, name="LUL", animated=True))
    '<a:LUL:41771983429993937>'

.. autoclass:: MentionType
   :members:

.. autoclass:: MentionKind
   :members:

.. autoclass:: User

.. autoclass:: Role

.. autoclass:: Channel

.. autoclass:: Emoji

.. autoclass:: Timestamp
   :members:

.. autoclass:: TimestampStyle
   :members:


Scan results
------------

.. autoclass:: ParsedMention
   :members:

.. autoclass:: ParseMentionError
   :members:

.. autoclass:: ErrorKind
   :members:

"""

from __future__ import annotations

import abc
import datetime
import enum
from dataclasses import dataclass

import mentionkit
from mentionkit import _typing as _t

__all__ = [
    "Channel",
    "Emoji",
    "ErrorKind",
    "MAX_SNOWFLAKE",
    "MAX_UNIX",
    "MIN_UNIX",
    "MentionKind",
    "MentionType",
    "ParseMentionError",
    "ParsedMention",
    "Role",
    "Timestamp",
    "TimestampStyle",
    "User",
]

MAX_SNOWFLAKE = 2**64 - 1
"""
Largest identifier that fits an unsigned 64-bit integer.

"""

MIN_UNIX = -(2**63)
"""
Smallest Unix timestamp that fits a signed 64-bit integer.

"""

MAX_UNIX = 2**63 - 1
"""
Largest Unix timestamp that fits a signed 64-bit integer.

"""


class MentionType(enum.Enum):
    """
    Tag that identifies a kind of mention. Used to filter scans.

    """

    USER = "user"
    ROLE = "role"
    CHANNEL = "channel"
    EMOJI = "emoji"
    TIMESTAMP = "timestamp"


class TimestampStyle(enum.Enum):
    """
    Display style of a timestamp mention.

    Value of each member is its single-character style code.

    """

    SHORT_TIME = "t"
    """
    Short time, i.e. ``16:20``.

    """

    LONG_TIME = "T"
    """
    Long time, i.e. ``16:20:30``.

    """

    SHORT_DATE = "d"
    """
    Short date, i.e. ``20/04/2021``.

    """

    LONG_DATE = "D"
    """
    Long date, i.e. ``20 April 2021``.

    """

    SHORT_DATE_TIME = "f"
    """
    Short date and time, i.e. ``20 April 2021 16:20``.

    """

    LONG_DATE_TIME = "F"
    """
    Long date and time, i.e. ``Tuesday, 20 April 2021 16:20``.

    """

    RELATIVE_TIME = "R"
    """
    Relative time, i.e. ``2 months ago``.

    """

    @property
    def code(self) -> str:
        """
        Single-character code of this style.

        """

        return self.value

    def __str__(self) -> str:
        return self.value


def _check_int(name: str, value: object, lo: int, hi: int):
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} should be an int, got {type(value).__name__}")
    if not lo <= value <= hi:
        raise ValueError(f"{name} should be in range [{lo}, {hi}], got {value}")


class MentionKind(abc.ABC):
    """
    Base class for all mention kinds.

    Converting a mention kind to string produces its canonical markup.

    """

    __slots__ = ()

    @property
    @abc.abstractmethod
    def type(self) -> MentionType:
        """
        Tag of this mention kind.

        """

    def __str__(self) -> str:
        import mentionkit.fmt

        return mentionkit.fmt.format_mention(self)


@dataclass(frozen=True, **mentionkit._with_slots())
class User(MentionKind):
    """
    Mention of a user, formatted as ``<@ID>``.

    """

    id: int

    def __post_init__(self):
        _check_int("user id", self.id, 0, MAX_SNOWFLAKE)

    @property
    def type(self) -> MentionType:
        return MentionType.USER


@dataclass(frozen=True, **mentionkit._with_slots())
class Role(MentionKind):
    """
    Mention of a role, formatted as ``<@&ID>``.

    """

    id: int

    def __post_init__(self):
        _check_int("role id", self.id, 0, MAX_SNOWFLAKE)

    @property
    def type(self) -> MentionType:
        return MentionType.ROLE


@dataclass(frozen=True, **mentionkit._with_slots())
class Channel(MentionKind):
    """
    Mention of a channel, formatted as ``<#ID>``.

    """

    id: int

    def __post_init__(self):
        _check_int("channel id", self.id, 0, MAX_SNOWFLAKE)

    @property
    def type(self) -> MentionType:
        return MentionType.CHANNEL


@dataclass(frozen=True, **mentionkit._with_slots())
class Emoji(MentionKind):
    """
    Custom emoji, formatted as ``<:NAME:ID>``, or ``<a:NAME:ID>``
    if it is animated.

    """

    id: int
    """
    Emoji identifier.

    """

    name: str | None = None
    """
    Display name, as written in the markup. Platforms ignore it
    when rendering, so it is never validated beyond what's needed
    to keep the markup well-formed.

    """

    animated: bool = False
    """
    Whether this emoji is animated.

    """

    def __post_init__(self):
        _check_int("emoji id", self.id, 0, MAX_SNOWFLAKE)
        if self.name is not None:
            if not isinstance(self.name, str):
                raise TypeError(
                    f"emoji name should be a str, got {type(self.name).__name__}"
                )
            if not self.name:
                raise ValueError("emoji name can't be empty, use None instead")
            if any(c in self.name for c in "<>:"):
                raise ValueError(
                    f"emoji name can't contain '<', '>' or ':': {self.name!r}"
                )

    @property
    def type(self) -> MentionType:
        return MentionType.EMOJI


@dataclass(frozen=True, **mentionkit._with_slots())
class Timestamp(MentionKind):
    """
    Timestamp that renders in viewer's timezone, formatted as ``<t:UNIX>``
    or ``<t:UNIX:STYLE>``.

    """

    unix: int
    """
    Number of seconds since Unix epoch, can be negative.

    """

    style: TimestampStyle | None = None
    """
    Display style. If not given, platforms default
    to :attr:`TimestampStyle.SHORT_DATE_TIME`.

    """

    def __post_init__(self):
        _check_int("unix timestamp", self.unix, MIN_UNIX, MAX_UNIX)
        if self.style is not None and not isinstance(self.style, TimestampStyle):
            raise TypeError(
                f"timestamp style should be a TimestampStyle, "
                f"got {type(self.style).__name__}"
            )

    @classmethod
    def from_datetime(
        cls, dt: datetime.datetime, /, style: TimestampStyle | None = None
    ) -> _t.Self:
        """
        Create a timestamp from an aware datetime. Naive datetimes
        are treated as local time. Fractions of a second are dropped.

        """

        return cls(int(dt.timestamp() // 1), style)

    def to_datetime(self) -> datetime.datetime:
        """
        Convert this timestamp to an aware UTC datetime.

        """

        return datetime.datetime.fromtimestamp(self.unix, tz=datetime.timezone.utc)

    @property
    def type(self) -> MentionType:
        return MentionType.TIMESTAMP


@dataclass(frozen=True, **mentionkit._with_slots())
class ParsedMention:
    """
    A mention found in a text.

    """

    kind: MentionKind
    """
    Parsed mention.

    """

    span: tuple[int, int]
    """
    Half-open range of the scanned text that contains the mention markup,
    including delimiters.

    """

    @property
    def start(self) -> int:
        return self.span[0]

    @property
    def end(self) -> int:
        return self.span[1]

    def excerpt(self, text: str, /) -> str:
        """
        Get markup of this mention from the text it was found in.

        """

        return text[self.span[0] : self.span[1]]


class ErrorKind(enum.Enum):
    """
    Reason why a mention candidate could not be parsed.

    """

    NO_LEADING_DELIMITER = "no leading delimiter"
    """
    Text doesn't start with ``<``.

    """

    NO_TRAILING_DELIMITER = "no trailing delimiter"
    """
    Mention body is not followed by ``>``.

    """

    UNRECOGNIZED_SIGIL = "unrecognized sigil"
    """
    ``<`` is not followed by any known sigil.

    """

    IDENTIFIER_TOO_LARGE = "identifier too large"
    """
    Numeric body doesn't fit its 64-bit range.

    """

    IDENTIFIER_MALFORMED = "identifier malformed"
    """
    Numeric body contains a character that is not a digit.

    """

    TIMESTAMP_STYLE_INVALID = "timestamp style invalid"
    """
    Timestamp style code is missing or unknown.

    """

    EMPTY_BODY = "empty body"
    """
    A required part of mention body is missing.

    """

    def __str__(self) -> str:
        return self.value


class ParseMentionError(ValueError):
    """
    Describes a malformed mention.

    Scanners return these as items rather than raising them; single-shot
    parsing raises them.

    :param kind:
        what went wrong.
    :param span:
        half-open range of text that was consumed before the failure
        was detected.
    :param msg:
        human-readable message. Derived from `kind` and `span` if not given.

    """

    def __init__(
        self, kind: ErrorKind, span: tuple[int, int], msg: str | None = None, /
    ):
        if msg is None:
            msg = f"{kind} at position {span[0]}"
        super().__init__(msg)

        self.kind: ErrorKind = kind
        """
        What went wrong.

        """

        self.span: tuple[int, int] = span
        """
        Half-open range of the consumed text.

        """

    @property
    def start(self) -> int:
        return self.span[0]

    @property
    def end(self) -> int:
        return self.span[1]

    def excerpt(self, text: str, /) -> str:
        """
        Get the malformed region from the text it was found in.

        """

        return text[self.span[0] : self.span[1]]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParseMentionError):
            return NotImplemented
        return self.kind is other.kind and self.span == other.span

    def __hash__(self) -> int:
        return hash((self.kind, self.span))

    def __repr__(self) -> str:
        return f"ParseMentionError({self.kind.name}, {self.span!r}, {str(self)!r})"
