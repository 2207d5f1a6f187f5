# Mentionkit project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Formatting mentions.

Use :func:`format_mention` to get canonical markup for a mention::

    >>> format_mention(mentionkit.model.Channel(81384788765712384))
    '<#81384788765712384>'

Objects from your own data model can be mentioned by implementing
``__mention__``, a method that returns a :class:`~mentionkit.model.MentionKind`::

    >>> class Member:
    ...     def __init__(self, user_id):
    ...         self.user_id = user_id
    ...
    ...     def __mention__(self):
    ...         return mentionkit.model.User(self.user_id)
    >>> mention(Member(80351110224678912))
    '<@80351110224678912>'

Formatting is the exact inverse of parsing: for every mention ``m``,
``parse_mention(format_mention(m)) == m``.

.. autofunction:: format_mention

.. autofunction:: mention

.. autoclass:: SupportsMention
   :members:

"""

from __future__ import annotations

import mentionkit.grammar
import mentionkit.model
from mentionkit import _typing as _t

__all__ = [
    "SupportsMention",
    "format_mention",
    "mention",
]

_OPEN = mentionkit.grammar.open_delimiter()
_CLOSE = mentionkit.grammar.close_delimiter()
_SEPARATOR = mentionkit.grammar.separator()


@_t.runtime_checkable
class SupportsMention(_t.Protocol):
    """
    Protocol for objects that can be mentioned.

    """

    def __mention__(self) -> mentionkit.model.MentionKind:
        """
        Return a mention that refers to this object.

        """


def format_mention(kind: mentionkit.model.MentionKind, /) -> str:
    """
    Format a mention as markup.

    Emoji without a name are formatted with an empty name field,
    i.e. ``<::ID>``.

    :param kind:
        mention to format.

    """

    if not isinstance(kind, mentionkit.model.MentionKind):
        raise TypeError(f"expected a MentionKind, got {type(kind).__name__}")

    sigil = mentionkit.grammar.canonical_sigil(
        kind.type, isinstance(kind, mentionkit.model.Emoji) and kind.animated
    ).text

    if isinstance(kind, mentionkit.model.Emoji):
        body = f"{kind.name or ''}{_SEPARATOR}{kind.id}"
    elif isinstance(kind, mentionkit.model.Timestamp):
        body = str(kind.unix)
        if kind.style is not None:
            body += _SEPARATOR + mentionkit.grammar.style_code_for(kind.style)
    else:
        body = str(kind.id)  # type: ignore

    return f"{_OPEN}{sigil}{body}{_CLOSE}"


def mention(obj: mentionkit.model.MentionKind | SupportsMention, /) -> str:
    """
    Format a mention, or an object that supports :class:`SupportsMention`.

    """

    if isinstance(obj, mentionkit.model.MentionKind):
        return format_mention(obj)
    elif isinstance(obj, SupportsMention):
        return format_mention(obj.__mention__())
    else:
        raise TypeError(f"{type(obj).__name__} can't be mentioned")
