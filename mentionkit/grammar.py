# Mentionkit project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Static description of mention markup.

Every mention looks like ``<SIGIL BODY>``. The sigil selects mention kind,
and the kind selects body grammar::

    >>> match_sigil("<@&41771983423143936>", 1)
    Sigil(text='@&', type=<MentionType.ROLE: 'role'>, animated=False)
    >>> body_grammar(mentionkit.model.MentionType.ROLE)
    <BodyGrammar.SNOWFLAKE: 'snowflake'>

Delimiters
----------

.. autofunction:: open_delimiter

.. autofunction:: close_delimiter

.. autofunction:: separator


Sigils
------

.. autoclass:: Sigil

.. autofunction:: sigil_table

.. autofunction:: match_sigil

.. autofunction:: canonical_sigil


Bodies
------

.. autoclass:: BodyGrammar
   :members:

.. autofunction:: body_grammar

.. autofunction:: style_code_for

.. autofunction:: style_for_code

.. autofunction:: is_style_code

.. autofunction:: value_range

"""

from __future__ import annotations

import enum
from dataclasses import dataclass

import mentionkit
import mentionkit.model

__all__ = [
    "BodyGrammar",
    "Sigil",
    "body_grammar",
    "canonical_sigil",
    "close_delimiter",
    "is_style_code",
    "match_sigil",
    "open_delimiter",
    "separator",
    "sigil_table",
    "style_code_for",
    "style_for_code",
    "value_range",
]

_OPEN = "<"
_CLOSE = ">"
_SEPARATOR = ":"


def open_delimiter() -> str:
    """
    Character that starts every mention.

    """

    return _OPEN


def close_delimiter() -> str:
    """
    Character that ends every mention.

    """

    return _CLOSE


def separator() -> str:
    """
    Character that separates fields inside emoji and timestamp bodies.

    """

    return _SEPARATOR


@dataclass(frozen=True, **mentionkit._with_slots())
class Sigil:
    """
    Marker that follows the open delimiter and selects mention kind.

    """

    text: str
    """
    Sigil characters.

    """

    type: mentionkit.model.MentionType
    """
    Kind of mention introduced by this sigil.

    """

    animated: bool = False
    """
    For emoji, whether this sigil introduces an animated emoji.

    """


# Order matters: a sigil must come before any other sigil that is its prefix.
_SIGILS: tuple[Sigil, ...] = (
    Sigil("@&", mentionkit.model.MentionType.ROLE),
    Sigil("@!", mentionkit.model.MentionType.USER),
    Sigil("@", mentionkit.model.MentionType.USER),
    Sigil("#", mentionkit.model.MentionType.CHANNEL),
    Sigil("a:", mentionkit.model.MentionType.EMOJI, animated=True),
    Sigil(":", mentionkit.model.MentionType.EMOJI),
    Sigil("t:", mentionkit.model.MentionType.TIMESTAMP),
)


def sigil_table() -> tuple[Sigil, ...]:
    """
    All known sigils, in the order they should be tried.

    Longer sigils go before shorter sigils that are their prefixes,
    so that ``<@&`` is recognized as a role and not as a user.

    """

    return _SIGILS


def match_sigil(text: str, pos: int, /) -> Sigil | None:
    """
    Find the first sigil from :func:`sigil_table` that starts
    at the given position.

    :param text:
        text to look at.
    :param pos:
        position right after the open delimiter.
    :returns:
        matched sigil, or :data:`None`.

    """

    for sigil in _SIGILS:
        if text.startswith(sigil.text, pos):
            return sigil
    return None


def canonical_sigil(
    type: mentionkit.model.MentionType, /, animated: bool = False
) -> Sigil:
    """
    Get the sigil that formatters use for the given mention kind.

    When a kind has several sigils, the shortest one is canonical.

    """

    candidates = [s for s in _SIGILS if s.type is type and s.animated == animated]
    if not candidates:
        raise ValueError(f"no sigil for {type.value} mention (animated={animated})")
    return min(candidates, key=lambda s: len(s.text))


class BodyGrammar(enum.Enum):
    """
    Shape of a mention body, i.e. everything between sigil
    and close delimiter.

    """

    SNOWFLAKE = "snowflake"
    """
    Non-empty run of ASCII digits that fits an unsigned 64-bit integer.

    """

    EMOJI = "emoji"
    """
    Optional display name that contains neither delimiters nor the separator,
    then the separator, then a snowflake.

    """

    TIMESTAMP = "timestamp"
    """
    Optionally signed run of ASCII digits that fits a signed 64-bit integer,
    then, optionally, the separator and a single-character style code.

    """


_BODIES: dict[mentionkit.model.MentionType, BodyGrammar] = {
    mentionkit.model.MentionType.USER: BodyGrammar.SNOWFLAKE,
    mentionkit.model.MentionType.ROLE: BodyGrammar.SNOWFLAKE,
    mentionkit.model.MentionType.CHANNEL: BodyGrammar.SNOWFLAKE,
    mentionkit.model.MentionType.EMOJI: BodyGrammar.EMOJI,
    mentionkit.model.MentionType.TIMESTAMP: BodyGrammar.TIMESTAMP,
}


def body_grammar(type: mentionkit.model.MentionType, /) -> BodyGrammar:
    """
    Get body grammar for the given mention kind.

    """

    return _BODIES[type]


def value_range(body: BodyGrammar, /) -> tuple[int, int]:
    """
    Inclusive range of the numeric part of a body.

    """

    if body is BodyGrammar.TIMESTAMP:
        return mentionkit.model.MIN_UNIX, mentionkit.model.MAX_UNIX
    else:
        return 0, mentionkit.model.MAX_SNOWFLAKE


_STYLES_BY_CODE: dict[str, mentionkit.model.TimestampStyle] = {
    style.value: style for style in mentionkit.model.TimestampStyle
}


def style_code_for(style: mentionkit.model.TimestampStyle, /) -> str:
    """
    Get single-character code for a timestamp style.

    """

    return style.value


def is_style_code(code: str, /) -> bool:
    """
    Check if the given string is a known timestamp style code.

    """

    return code in _STYLES_BY_CODE


def style_for_code(code: str, /) -> mentionkit.model.TimestampStyle:
    """
    Get timestamp style by its code.

    :raises:
        :class:`~mentionkit.model.ParseMentionError` with
        :attr:`~mentionkit.model.ErrorKind.TIMESTAMP_STYLE_INVALID`
        if the code is not known. Its span covers the given code.

    """

    try:
        return _STYLES_BY_CODE[code]
    except KeyError:
        codes = ", ".join(_STYLES_BY_CODE)
        raise mentionkit.model.ParseMentionError(
            mentionkit.model.ErrorKind.TIMESTAMP_STYLE_INVALID,
            (0, len(code)),
            f"unknown timestamp style {code!r}, should be one of {codes}",
        ) from None
