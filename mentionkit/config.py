# Mentionkit project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Scan settings that can be loaded from files or environment variables.

Create :class:`ScanConfig` directly::

    >>> config = ScanConfig(
    ...     kinds={mentionkit.model.MentionType.USER}, skip_errors=True
    ... )
    >>> [str(m.kind) for m in config.scan("<@1> <#2> <@3")]
    ['<@1>']

Or load it, and update it with values from other sources::

    # Load config from a file.
    config = ScanConfig.load_from_json_file("~/.mentionkit.json")

    # Update config with values from env.
    config.update(ScanConfig.load_from_env())


Environment variables
---------------------

By default, :meth:`ScanConfig.load_from_env` reads the following variables:

``MENTIONKIT_KINDS``
    comma- or space-separated list of mention kinds to look for,
    i.e. ``user,role``. Empty means all kinds.

``MENTIONKIT_SKIP_ERRORS``
    ``yes`` or ``no``; whether :meth:`ScanConfig.scan` should drop
    malformed mentions.


Config files
------------

Config files contain a JSON object with fields ``kinds`` (a list of strings)
and ``skip_errors`` (a boolean).


Reference
---------

.. autoclass:: ScanConfig
   :members:

.. autoclass:: ConfigError

"""

from __future__ import annotations

import json
import os
import pathlib
import re
import textwrap

import mentionkit
import mentionkit.model
import mentionkit.scan
from mentionkit import _typing as _t

__all__ = [
    "ConfigError",
    "ScanConfig",
]


class ConfigError(ValueError):
    """
    Raised when config can't be loaded.

    """


_LIST_DELIM_RE = re.compile(r"[\s,]+")


def _parse_kind(value: str, /) -> mentionkit.model.MentionType:
    cf_value = value.strip().casefold()
    for kind in mentionkit.model.MentionType:
        if kind.value == cf_value:
            return kind
    kinds = ", ".join(kind.value for kind in mentionkit.model.MentionType)
    raise ConfigError(
        f"can't parse {value!r} as a mention kind, should be one of {kinds}"
    )


def _parse_kinds(value: str, /) -> frozenset[mentionkit.model.MentionType]:
    return frozenset(
        _parse_kind(item) for item in _LIST_DELIM_RE.split(value) if item
    )


def _parse_bool(value: str, /) -> bool:
    value = value.strip().lower()

    if value in ("y", "yes", "true", "1"):
        return True
    elif value in ("n", "no", "false", "0"):
        return False
    else:
        raise ConfigError(f"can't parse {value!r}, enter either 'yes' or 'no'")


def _parse_config_kinds(
    value: object, /
) -> frozenset[mentionkit.model.MentionType]:
    if not isinstance(value, list):
        raise ConfigError(f"expected list, got {type(value).__name__}")
    kinds = set()
    for item in value:
        if not isinstance(item, str):
            raise ConfigError(f"expected string, got {type(item).__name__}")
        kinds.add(_parse_kind(item))
    return frozenset(kinds)


def _parse_config_bool(value: object, /) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"expected bool, got {type(value).__name__}")
    return value


# Field name -> (env parser, config file parser).
_FIELDS: dict[
    str, tuple[_t.Callable[[str], _t.Any], _t.Callable[[object], _t.Any]]
] = {
    "kinds": (_parse_kinds, _parse_config_kinds),
    "skip_errors": (_parse_bool, _parse_config_bool),
}


class ScanConfig:
    """
    Settings for scanning text.

    Pass keyword args to set fields, or pass another config to copy it::

        ScanConfig(config1, config2, ..., field1=value1, ...)

    """

    kinds: frozenset[mentionkit.model.MentionType] = frozenset()
    """
    Kinds of mentions to look for. Empty set means all kinds.

    """

    skip_errors: bool = False
    """
    Drop malformed mentions instead of reporting them.

    """

    def __init__(self, *args: ScanConfig | dict[str, _t.Any], **kwargs):
        for arg in args:
            self.update(arg)

        self.update(kwargs)

    def update(self, other: ScanConfig | dict[str, _t.Any], /):
        """
        Update fields in this config with fields from another config.

        This function is similar to :meth:`dict.update`.

        :param other:
            data for update.

        """

        if not other:
            return

        if isinstance(other, ScanConfig):
            ns = other.__dict__
        elif isinstance(other, dict):
            ns = other
            for name in ns:
                if name not in _FIELDS:
                    raise TypeError(f"unknown field: {name}")
        else:
            raise TypeError("expected a dict or a config class")

        if "kinds" in ns:
            kinds = frozenset(ns["kinds"])
            for kind in kinds:
                if not isinstance(kind, mentionkit.model.MentionType):
                    raise TypeError(f"expected a MentionType, got {kind!r}")
            self.kinds = kinds
        if "skip_errors" in ns:
            skip_errors = ns["skip_errors"]
            if not isinstance(skip_errors, bool):
                raise TypeError(f"expected a bool, got {skip_errors!r}")
            self.skip_errors = skip_errors

    @classmethod
    def load_from_env(cls, prefix: str = "MENTIONKIT") -> _t.Self:
        """
        Load config from environment variables.

        :param prefix:
            names of all environment variables will be prefixed with
            this string and an underscore.

        """

        try:
            return cls.__load_from_env(prefix)
        except ConfigError as e:
            raise ConfigError(
                "failed to load config from environment variables:\n"
                + textwrap.indent(str(e), "  ")
            ) from None

    @classmethod
    def __load_from_env(cls, prefix: str) -> _t.Self:
        fields = {}

        for name, (parser, _) in _FIELDS.items():
            env = f"{prefix}_{name.upper()}" if prefix else name.upper()
            if env in os.environ:
                mentionkit._logger.debug("loading %s from %s", name, env)
                try:
                    fields[name] = parser(os.environ[env])
                except ConfigError as e:
                    raise ConfigError(
                        f"can't parse {env}:\n" + textwrap.indent(str(e), "  ")
                    ) from None

        return cls(**fields)

    @classmethod
    def load_from_json_file(
        cls,
        path: str | pathlib.Path,
        /,
        *,
        ignore_unknown_fields: bool = False,
        ignore_missing_file: bool = False,
    ) -> _t.Self:
        """
        Load config from a ``.json`` file.

        :param path:
            path of the config file. ``~`` is expanded.
        :param ignore_unknown_fields:
            if :data:`True`, this method will ignore fields that aren't known.
        :param ignore_missing_file:
            if :data:`True`, silently ignore a missing file error. This is useful
            when loading a config from a home directory.

        """

        path = pathlib.Path(path).expanduser()

        if ignore_missing_file and not path.exists():
            mentionkit._logger.debug("config %s doesn't exist, using defaults", path)
            return cls()

        try:
            with open(path) as file:
                loaded = json.loads(file.read())
        except Exception as e:
            raise ConfigError(
                f"invalid config {path}:\n" + textwrap.indent(str(e), "  ")
            ) from None

        return cls.load_from_parsed_file(
            loaded, ignore_unknown_fields=ignore_unknown_fields, path=path
        )

    @classmethod
    def load_from_parsed_file(
        cls,
        parsed: dict[str, object],
        /,
        *,
        ignore_unknown_fields: bool = False,
        path: str | pathlib.Path | None = None,
    ) -> _t.Self:
        """
        Load config from parsed config file.

        This method takes a dict with arbitrary values that you'd get from
        parsing type-rich configs such as ``json``.

        :param parsed:
            data from parsed file.
        :param ignore_unknown_fields:
            if :data:`True`, this method will ignore fields that aren't known.
        :param path:
            path of the original file, used for error reporting.

        """

        try:
            return cls.__load_from_parsed_file(parsed, ignore_unknown_fields)
        except ConfigError as e:
            if path is None:
                raise
            else:
                raise ConfigError(
                    f"invalid config {path}:\n" + textwrap.indent(str(e), "  ")
                ) from None

    @classmethod
    def __load_from_parsed_file(
        cls, parsed: dict[str, object], ignore_unknown_fields: bool
    ) -> _t.Self:
        if not isinstance(parsed, dict):
            raise ConfigError(
                f"config should be a dict, got {type(parsed).__name__}"
            )

        if not ignore_unknown_fields:
            for name in parsed:
                if name not in _FIELDS and name != "$schema":
                    raise ConfigError(f"unknown field {name}")

        fields = {}

        for name, (_, parser) in _FIELDS.items():
            if name in parsed:
                try:
                    fields[name] = parser(parsed[name])
                except ConfigError as e:
                    raise ConfigError(
                        f"can't parse {name}:\n" + textwrap.indent(str(e), "  ")
                    ) from None

        return cls(**fields)

    def scanner(self, text: str, /) -> mentionkit.scan.MentionScanner:
        """
        Create a scanner that looks for mentions of configured kinds.

        """

        return mentionkit.scan.MentionScanner(text, self.kinds)

    def scan(
        self, text: str, /
    ) -> _t.Iterator[
        mentionkit.model.ParsedMention | mentionkit.model.ParseMentionError
    ]:
        """
        Scan text according to this config.

        """

        scanner = self.scanner(text)
        if self.skip_errors:
            return (
                item
                for item in scanner
                if isinstance(item, mentionkit.model.ParsedMention)
            )
        else:
            return scanner

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScanConfig):
            return NotImplemented
        return self.kinds == other.kinds and self.skip_errors == other.skip_errors

    __hash__ = None  # type: ignore

    def __repr__(self):
        kinds = sorted(kind.value for kind in self.kinds)
        return f"ScanConfig(kinds={kinds!r}, skip_errors={self.skip_errors!r})"
