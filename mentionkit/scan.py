# Mentionkit project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Finding mentions in arbitrary text.

:class:`MentionScanner` walks the text from left to right and returns every
mention candidate it finds: either a :class:`~mentionkit.model.ParsedMention`,
or a :class:`~mentionkit.model.ParseMentionError` if the candidate
is malformed::

    >>> for item in MentionScanner("<@ and <@123>"):
    ...     print(type(item).__name__, item.span)
    ParseMentionError (0, 2)
    ParsedMention (7, 13)

Text that merely contains ``<`` without a known sigil after it is not
considered a candidate, and produces nothing::

    >>> list(MentionScanner("1 < 2, <3"))
    []

Scanners can be restricted to particular kinds of mentions::

    >>> text = "<@123> in <#456>"
    >>> list(MentionScanner(text, [mentionkit.model.MentionType.CHANNEL]))
    [ParsedMention(kind=Channel(id=456), span=(10, 16))]

To parse a string that should contain exactly one mention,
use :func:`parse_mention`::

    >>> parse_mention("<t:1650000000:R>")
    Timestamp(unix=1650000000, style=<TimestampStyle.RELATIVE_TIME: 'R'>)


Scanning
--------

.. autoclass:: MentionScanner
   :members:

.. autofunction:: find_mentions


Parsing
-------

.. autofunction:: parse_mention

"""

from __future__ import annotations

import re

import mentionkit
import mentionkit.grammar
import mentionkit.model
from mentionkit import _typing as _t

__all__ = [
    "MentionScanner",
    "find_mentions",
    "parse_mention",
]

_OPEN = mentionkit.grammar.open_delimiter()
_CLOSE = mentionkit.grammar.close_delimiter()
_SEPARATOR = mentionkit.grammar.separator()

_DIGITS_RE = re.compile(r"[0-9]*")
_EMOJI_NAME_RE = re.compile("[^" + re.escape(_OPEN + _CLOSE + _SEPARATOR) + "]*")

_SNOWFLAKE_KINDS: dict[
    mentionkit.model.MentionType, _t.Callable[[int], mentionkit.model.MentionKind]
] = {
    mentionkit.model.MentionType.USER: mentionkit.model.User,
    mentionkit.model.MentionType.ROLE: mentionkit.model.Role,
    mentionkit.model.MentionType.CHANNEL: mentionkit.model.Channel,
}

# Longest decimal representation of any value that fits 64 bits.
_MAX_DIGITS = 20


class MentionScanner:
    """
    Lazily finds mentions in a text.

    Each call to :func:`next` performs one scan step and returns either
    a :class:`~mentionkit.model.ParsedMention`, or
    a :class:`~mentionkit.model.ParseMentionError` for a malformed candidate.
    Once the text is exhausted, the scanner raises :class:`StopIteration`,
    and keeps raising it on every subsequent call.

    After a malformed candidate, scanning resumes right after its open
    delimiter, so mentions that follow a broken one are never skipped.
    Spans of returned items never overlap, and their start positions
    are strictly increasing.

    Scanners can't be restarted; create a new one to scan the same text again.
    The scanned text is never modified, so any number of scanners
    can share it.

    :param text:
        text to scan.
    :param kinds:
        if given and not empty, only mentions of these kinds will be reported.
        Other mentions will be skipped as if they were plain text.

    """

    def __init__(
        self,
        text: str,
        /,
        kinds: _t.Iterable[mentionkit.model.MentionType] | None = None,
    ):
        if not isinstance(text, str):
            raise TypeError(f"expected a str, got {type(text).__name__}")

        self.__text = text
        self.__kinds = _check_kinds(kinds)
        self.__pos = 0
        self.__done = False

    @property
    def text(self) -> str:
        """
        Text that is being scanned.

        """

        return self.__text

    @property
    def kinds(self) -> frozenset[mentionkit.model.MentionType] | None:
        """
        Kinds of mentions this scanner looks for, or :data:`None`
        if it looks for all of them.

        """

        return self.__kinds

    @property
    def position(self) -> int:
        """
        Position from which the next scan step will start.

        """

        return self.__pos

    def __iter__(self) -> _t.Self:
        return self

    def __next__(
        self,
    ) -> mentionkit.model.ParsedMention | mentionkit.model.ParseMentionError:
        if self.__done:
            raise StopIteration

        text = self.__text
        while True:
            start = text.find(_OPEN, self.__pos)
            if start == -1:
                self.__pos = len(text)
                self.__done = True
                raise StopIteration

            sigil = mentionkit.grammar.match_sigil(text, start + 1)
            if sigil is None or (
                self.__kinds is not None and sigil.type not in self.__kinds
            ):
                self.__pos = start + 1
                continue

            try:
                kind, end = _parse_candidate(text, start, sigil)
            except mentionkit.model.ParseMentionError as e:
                mentionkit._logger.debug(
                    "malformed %s mention at %s: %s", sigil.type.value, e.span, e
                )
                self.__pos = start + 1
                return e
            else:
                self.__pos = end
                return mentionkit.model.ParsedMention(kind, (start, end))

    def __repr__(self):
        return f"MentionScanner(position={self.__pos}, kinds={self.__kinds!r})"


def find_mentions(
    text: str, /, *kinds: mentionkit.model.MentionType
) -> list[mentionkit.model.ParsedMention]:
    """
    Find all well-formed mentions in a text, ignoring malformed ones.

    :param text:
        text to scan.
    :param kinds:
        if given, only mentions of these kinds will be returned.

    """

    return [
        item
        for item in MentionScanner(text, kinds)
        if isinstance(item, mentionkit.model.ParsedMention)
    ]


def parse_mention(
    text: str, /, *kinds: mentionkit.model.MentionType
) -> mentionkit.model.MentionKind:
    """
    Parse a string that consists of exactly one mention.

    :param text:
        text to parse.
    :param kinds:
        if given, the mention must be of one of these kinds.
    :raises:
        :class:`~mentionkit.model.ParseMentionError` if the text is not a mention.
        Unlike :class:`MentionScanner`, this function reports missing open
        delimiter and unknown sigils as errors.

    """

    if not isinstance(text, str):
        raise TypeError(f"expected a str, got {type(text).__name__}")

    allowed = _check_kinds(kinds)

    if not text.startswith(_OPEN):
        raise mentionkit.model.ParseMentionError(
            mentionkit.model.ErrorKind.NO_LEADING_DELIMITER,
            (0, 0),
            f"expected {_OPEN!r} at position 0",
        )

    sigil = mentionkit.grammar.match_sigil(text, 1)
    if sigil is None or (allowed is not None and sigil.type not in allowed):
        if allowed is None:
            expected = mentionkit.grammar.sigil_table()
        else:
            expected = [
                s for s in mentionkit.grammar.sigil_table() if s.type in allowed
            ]
        raise mentionkit.model.ParseMentionError(
            mentionkit.model.ErrorKind.UNRECOGNIZED_SIGIL,
            (0, 1),
            f"expected one of {', '.join(repr(s.text) for s in expected)} "
            f"at position 1",
        )

    kind, end = _parse_candidate(text, 0, sigil)
    if end != len(text):
        raise mentionkit.model.ParseMentionError(
            mentionkit.model.ErrorKind.NO_TRAILING_DELIMITER,
            (0, end),
            f"unexpected {text[end]!r} after {_CLOSE!r} at position {end}",
        )

    return kind


def _check_kinds(
    kinds: _t.Iterable[mentionkit.model.MentionType] | None,
) -> frozenset[mentionkit.model.MentionType] | None:
    if kinds is None:
        return None
    kinds = frozenset(kinds)
    for kind in kinds:
        if not isinstance(kind, mentionkit.model.MentionType):
            raise TypeError(f"expected a MentionType, got {kind!r}")
    return kinds or None


def _error(
    kind: mentionkit.model.ErrorKind, start: int, end: int, msg: str
) -> mentionkit.model.ParseMentionError:
    return mentionkit.model.ParseMentionError(kind, (start, end), msg)


def _parse_candidate(
    text: str, start: int, sigil: mentionkit.grammar.Sigil
) -> tuple[mentionkit.model.MentionKind, int]:
    # Parses a mention whose open delimiter is at `start`. Returns parsed kind
    # and position right after the close delimiter. Error spans never include
    # the offending character, so they never cover the next candidate's `<`.

    pos = start + len(_OPEN) + len(sigil.text)
    body = mentionkit.grammar.body_grammar(sigil.type)

    kind: mentionkit.model.MentionKind
    if body is mentionkit.grammar.BodyGrammar.SNOWFLAKE:
        value, pos = _parse_number(text, start, pos, body, (_CLOSE,))
        kind = _SNOWFLAKE_KINDS[sigil.type](value)
    elif body is mentionkit.grammar.BodyGrammar.EMOJI:
        name_end = _EMOJI_NAME_RE.match(text, pos).end()  # type: ignore
        if name_end < len(text) and text[name_end] == _CLOSE:
            raise _error(
                mentionkit.model.ErrorKind.EMPTY_BODY,
                start,
                name_end,
                f"expected {_SEPARATOR!r} and emoji id at position {name_end}",
            )
        if name_end == len(text) or text[name_end] != _SEPARATOR:
            raise _error(
                mentionkit.model.ErrorKind.NO_TRAILING_DELIMITER,
                start,
                name_end,
                f"unterminated emoji at position {start}",
            )
        name = text[pos:name_end] or None
        value, pos = _parse_number(text, start, name_end + 1, body, (_CLOSE,))
        kind = mentionkit.model.Emoji(value, name, sigil.animated)
    else:
        value, pos = _parse_number(text, start, pos, body, (_CLOSE, _SEPARATOR))
        style = None
        if pos < len(text) and text[pos] == _SEPARATOR:
            code = text[pos + 1 : pos + 2]
            if not code:
                raise _error(
                    mentionkit.model.ErrorKind.NO_TRAILING_DELIMITER,
                    start,
                    pos + 1,
                    f"unterminated timestamp at position {start}",
                )
            if not mentionkit.grammar.is_style_code(code):
                raise _error(
                    mentionkit.model.ErrorKind.TIMESTAMP_STYLE_INVALID,
                    start,
                    pos + 1,
                    f"unknown timestamp style {code!r} at position {pos + 1}",
                )
            if pos + 2 < len(text) and text[pos + 2] != _CLOSE:
                raise _error(
                    mentionkit.model.ErrorKind.TIMESTAMP_STYLE_INVALID,
                    start,
                    pos + 1,
                    f"timestamp style should be a single character "
                    f"at position {pos + 1}",
                )
            style = mentionkit.grammar.style_for_code(code)
            pos += 2
        kind = mentionkit.model.Timestamp(value, style)

    if pos == len(text) or text[pos] != _CLOSE:
        raise _error(
            mentionkit.model.ErrorKind.NO_TRAILING_DELIMITER,
            start,
            pos,
            f"expected {_CLOSE!r} at position {pos}",
        )

    return kind, pos + len(_CLOSE)


def _parse_number(
    text: str,
    start: int,
    pos: int,
    body: mentionkit.grammar.BodyGrammar,
    terminators: tuple[str, ...],
) -> tuple[int, int]:
    # Parses a run of digits at `pos`. Returns its value and the position
    # right after it, leaving the terminator for the caller to check.

    lo, hi = mentionkit.grammar.value_range(body)

    digits_start = pos
    if lo < 0 and pos < len(text) and text[pos] in "+-":
        digits_start += 1
    end = _DIGITS_RE.match(text, digits_start).end()  # type: ignore

    if end < len(text) and text[end] not in terminators:
        raise _error(
            mentionkit.model.ErrorKind.IDENTIFIER_MALFORMED,
            start,
            end,
            f"unexpected {text[end]!r} in {body.value} at position {end}",
        )
    if end == digits_start:
        if end == len(text):
            raise _error(
                mentionkit.model.ErrorKind.NO_TRAILING_DELIMITER,
                start,
                end,
                f"unterminated mention at position {start}",
            )
        raise _error(
            mentionkit.model.ErrorKind.EMPTY_BODY,
            start,
            end,
            f"expected {body.value} at position {end}",
        )

    digits = text[digits_start:end].lstrip("0")
    if len(digits) > _MAX_DIGITS:
        value = None
    else:
        value = int(digits or "0")
        if text[pos] == "-":
            value = -value
    if value is None or not lo <= value <= hi:
        raise _error(
            mentionkit.model.ErrorKind.IDENTIFIER_TOO_LARGE,
            start,
            end,
            f"{body.value} {text[pos:end]} doesn't fit range [{lo}, {hi}]",
        )

    return value, end
