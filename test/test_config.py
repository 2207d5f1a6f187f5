import os

import pytest

import mentionkit.config
import mentionkit.scan
from mentionkit.config import ConfigError, ScanConfig
from mentionkit.model import (
    Channel,
    ErrorKind,
    MentionType,
    ParsedMention,
    ParseMentionError,
    User,
)


class TestBasics:
    def test_default(self):
        c = ScanConfig()
        assert c.kinds == frozenset()
        assert c.skip_errors is False

    def test_kwargs(self):
        c = ScanConfig(kinds={MentionType.USER}, skip_errors=True)
        assert c.kinds == frozenset({MentionType.USER})
        assert c.skip_errors is True

    def test_update(self):
        c = ScanConfig(kinds=[MentionType.USER])
        c.update(ScanConfig(skip_errors=True))
        assert c.kinds == frozenset({MentionType.USER})
        assert c.skip_errors is True

        c.update(dict(kinds=[MentionType.ROLE, MentionType.CHANNEL]))
        assert c.kinds == frozenset({MentionType.ROLE, MentionType.CHANNEL})
        assert c.skip_errors is True

    def test_update_unset_fields_are_kept(self):
        c = ScanConfig(kinds=[MentionType.USER], skip_errors=True)
        c.update(ScanConfig())
        assert c.kinds == frozenset({MentionType.USER})
        assert c.skip_errors is True

    def test_copy(self):
        c1 = ScanConfig(kinds=[MentionType.USER])
        c2 = ScanConfig(skip_errors=True)
        c = ScanConfig(c1, c2)
        assert c == ScanConfig(kinds=[MentionType.USER], skip_errors=True)

    def test_update_errors(self):
        with pytest.raises(TypeError, match="unknown field: x"):
            ScanConfig(x=1)
        with pytest.raises(TypeError, match="expected a MentionType"):
            ScanConfig(kinds=["user"])
        with pytest.raises(TypeError, match="expected a bool, got 'no'"):
            ScanConfig(skip_errors="no")
        with pytest.raises(TypeError, match="expected a bool, got 1"):
            ScanConfig().update(dict(skip_errors=1))
        with pytest.raises(TypeError, match="expected a dict or a config class"):
            ScanConfig().update(10)  # type: ignore

    def test_eq(self):
        assert ScanConfig() == ScanConfig()
        assert ScanConfig(skip_errors=True) != ScanConfig()
        assert ScanConfig(kinds=[MentionType.USER]) != ScanConfig()

    def test_repr(self):
        c = ScanConfig(kinds=[MentionType.USER, MentionType.CHANNEL])
        assert repr(c) == "ScanConfig(kinds=['channel', 'user'], skip_errors=False)"


class TestEnv:
    @pytest.fixture(autouse=True)
    def auto_fixtures(self, save_env):
        pass

    def test_empty(self):
        assert ScanConfig.load_from_env() == ScanConfig()

    def test_load(self):
        os.environ["MENTIONKIT_KINDS"] = "user, Role channel"
        c = ScanConfig.load_from_env()
        assert c.kinds == {MentionType.USER, MentionType.ROLE, MentionType.CHANNEL}
        assert c.skip_errors is False

        os.environ["MENTIONKIT_SKIP_ERRORS"] = "yes"
        c = ScanConfig.load_from_env()
        assert c.skip_errors is True

        os.environ["MENTIONKIT_SKIP_ERRORS"] = "False"
        c = ScanConfig.load_from_env()
        assert c.skip_errors is False

    def test_empty_kinds(self):
        os.environ["MENTIONKIT_KINDS"] = ""
        c = ScanConfig.load_from_env()
        assert c.kinds == frozenset()

    def test_prefix(self):
        os.environ["KINDS"] = "emoji"
        os.environ["BOT_KINDS"] = "timestamp"

        assert ScanConfig.load_from_env(prefix="").kinds == {MentionType.EMOJI}
        assert ScanConfig.load_from_env(prefix="BOT").kinds == {MentionType.TIMESTAMP}
        assert ScanConfig.load_from_env().kinds == frozenset()

    def test_errors(self):
        os.environ["MENTIONKIT_KINDS"] = "user,guild"
        with pytest.raises(
            ConfigError, match=r"can't parse MENTIONKIT_KINDS:\n.*'guild'"
        ):
            ScanConfig.load_from_env()

        os.environ["MENTIONKIT_KINDS"] = "user"
        os.environ["MENTIONKIT_SKIP_ERRORS"] = "maybe"
        with pytest.raises(ConfigError, match="enter either 'yes' or 'no'"):
            ScanConfig.load_from_env()

    def test_update_from_env(self):
        c = ScanConfig(kinds=[MentionType.USER], skip_errors=True)
        os.environ["MENTIONKIT_SKIP_ERRORS"] = "no"
        c.update(ScanConfig.load_from_env())
        assert c.kinds == frozenset({MentionType.USER})
        assert c.skip_errors is False


class TestFile:
    def test_load_from_parsed_file(self):
        c = ScanConfig.load_from_parsed_file(
            {"kinds": ["user", "emoji"], "skip_errors": True}
        )
        assert c.kinds == {MentionType.USER, MentionType.EMOJI}
        assert c.skip_errors is True

        c = ScanConfig.load_from_parsed_file({"$schema": "mentionkit.schema.json"})
        assert c == ScanConfig()

    def test_unknown_fields(self):
        with pytest.raises(ConfigError, match="unknown field x"):
            ScanConfig.load_from_parsed_file({"x": 1})

        c = ScanConfig.load_from_parsed_file(
            {"x": 1, "skip_errors": True}, ignore_unknown_fields=True
        )
        assert c.skip_errors is True

    def test_type_errors(self):
        with pytest.raises(ConfigError, match="config should be a dict, got list"):
            ScanConfig.load_from_parsed_file([])  # type: ignore
        with pytest.raises(ConfigError, match="can't parse kinds:\n  expected list"):
            ScanConfig.load_from_parsed_file({"kinds": "user"})
        with pytest.raises(ConfigError, match="expected string, got int"):
            ScanConfig.load_from_parsed_file({"kinds": [1]})
        with pytest.raises(ConfigError, match="can't parse 'guild' as a mention kind"):
            ScanConfig.load_from_parsed_file({"kinds": ["guild"]})
        with pytest.raises(ConfigError, match="expected bool, got str"):
            ScanConfig.load_from_parsed_file({"skip_errors": "yes"})

    def test_load_from_json_file(self, tmp_path):
        data_path = tmp_path / "data.json"

        with open(data_path, "w") as f:
            f.write('{"kinds": ["channel"], "skip_errors": true}')

        c = ScanConfig.load_from_json_file(data_path)
        assert c.kinds == {MentionType.CHANNEL}
        assert c.skip_errors is True

        data_path_2 = tmp_path / "data_2.json"

        with open(data_path_2, "w") as f:
            f.write('{"kinds": ["channel"], "x": 0}')

        c = ScanConfig.load_from_json_file(data_path_2, ignore_unknown_fields=True)
        assert c.kinds == {MentionType.CHANNEL}

        with pytest.raises(ConfigError, match="invalid config .*data_2.json"):
            ScanConfig.load_from_json_file(data_path_2)

        c = ScanConfig.load_from_json_file(
            tmp_path / "foo.json", ignore_missing_file=True
        )
        assert c == ScanConfig()

        with pytest.raises(ConfigError, match="invalid config .*foo.json"):
            ScanConfig.load_from_json_file(tmp_path / "foo.json")

    def test_broken_json(self, tmp_path):
        data_path = tmp_path / "data.json"

        with open(data_path, "w") as f:
            f.write('{"kinds": [')

        with pytest.raises(ConfigError, match="invalid config"):
            ScanConfig.load_from_json_file(data_path)


class TestScan:
    def test_all_kinds(self):
        c = ScanConfig()
        assert list(c.scan("<@1> <#2> <@x>")) == [
            ParsedMention(User(1), (0, 4)),
            ParsedMention(Channel(2), (5, 9)),
            ParseMentionError(ErrorKind.IDENTIFIER_MALFORMED, (10, 12)),
        ]

    def test_kinds(self):
        c = ScanConfig(kinds=[MentionType.CHANNEL])
        assert list(c.scan("<@1> <#2> <@x>")) == [
            ParsedMention(Channel(2), (5, 9)),
        ]

    def test_skip_errors(self):
        c = ScanConfig(skip_errors=True)
        assert list(c.scan("<@1> <#2> <@x>")) == [
            ParsedMention(User(1), (0, 4)),
            ParsedMention(Channel(2), (5, 9)),
        ]

    def test_scanner(self):
        c = ScanConfig(kinds=[MentionType.USER])
        scanner = c.scanner("<#1>")
        assert isinstance(scanner, mentionkit.scan.MentionScanner)
        assert scanner.kinds == frozenset({MentionType.USER})
        assert list(scanner) == []
