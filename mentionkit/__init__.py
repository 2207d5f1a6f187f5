# Mentionkit project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Mentionkit formats and parses chat mention markup: users, roles, channels,
custom emoji and timestamps.

Scan arbitrary text for mentions::

    >>> from mentionkit.scan import MentionScanner
    >>> [str(item.kind) for item in MentionScanner("hi <@80351110224678912>!")]
    ['<@80351110224678912>']

Or format them::

    >>> from mentionkit.model import Role
    >>> str(Role(41771983423143936))
    '<@&41771983423143936>'

"""

from __future__ import annotations

import logging as _logging
import os as _os
import sys as _sys

__version__ = "1.0.0"

__all__ = [
    "enable_internal_logging",
]


def _with_slots() -> dict[str, bool]:
    return {"slots": True}


_logger = _logging.getLogger("mentionkit.internal")
_logger.propagate = False

__stderr_handler = _logging.StreamHandler(_sys.__stderr__)
__stderr_handler.setLevel("CRITICAL")
_logger.addHandler(__stderr_handler)


def enable_internal_logging(
    path: str | None = None, level: str | int | None = None, propagate=None
):  # pragma: no cover
    """
    Enable Mentionkit's internal logging.

    This function sets up logging channel ``mentionkit.internal``.

    :param path:
        if given, adds a handler that outputs internal log messages to the given file.
    :param level:
        configures logging level for file handler. Default is ``DEBUG``.
    :param propagate:
        if given, enables or disables log message propagation
        from ``mentionkit.internal`` to the root logger.

    """

    if path:
        if level is None:
            level = _os.environ.get("MENTIONKIT_DEBUG", "").strip().upper() or "DEBUG"
        if level in ["1", "Y", "YES", "TRUE"]:
            level = "DEBUG"
        file_handler = _logging.FileHandler(path, delay=True)
        file_handler.setFormatter(
            _logging.Formatter("%(filename)s:%(lineno)d: %(levelname)s: %(message)s")
        )
        file_handler.setLevel(level)
        _logger.addHandler(file_handler)
        _logger.setLevel(level)

    if propagate is not None:
        _logger.propagate = propagate


_debug = "MENTIONKIT_DEBUG" in _os.environ or "MENTIONKIT_DEBUG_FILE" in _os.environ
if _debug:  # pragma: no cover
    enable_internal_logging(
        path=_os.environ.get("MENTIONKIT_DEBUG_FILE") or "mentionkit.log",
        propagate=False,
    )
