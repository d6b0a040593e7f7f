"""Tests for environment handling and debug logging."""

import pytest

from optspec.environment_helper import EnvironmentHelper, debug_log
from optspec.matcher import Matcher
from optspec.option_table import OptionTable


class TestEnvironmentHelperUnit:
    """Unit tests for EnvironmentHelper."""

    @pytest.mark.parametrize("value", ["1", "true", "YES", "On"])
    def test_debug_enabled_values(self, monkeypatch, value):
        monkeypatch.setenv("OPTSPEC_DEBUG", value)
        assert EnvironmentHelper.is_debug_enabled()

    @pytest.mark.parametrize("value", ["", "0", "false", "off", "maybe"])
    def test_debug_disabled_values(self, monkeypatch, value):
        monkeypatch.setenv("OPTSPEC_DEBUG", value)
        assert not EnvironmentHelper.is_debug_enabled()

    def test_debug_unset(self, debug_disabled):
        assert not EnvironmentHelper.is_debug_enabled()

    def test_enable_debug(self, monkeypatch, debug_disabled):
        EnvironmentHelper.enable_debug()
        assert EnvironmentHelper.is_debug_enabled()
        monkeypatch.delenv("OPTSPEC_DEBUG")


class TestDebugLog:
    """debug_log output."""

    def test_silent_by_default(self, capsys, debug_disabled):
        debug_log("hello")
        assert capsys.readouterr().err == ""

    def test_prints_to_stderr_when_enabled(self, capsys, monkeypatch):
        monkeypatch.setenv("OPTSPEC_DEBUG", "1")
        debug_log("hello")
        captured = capsys.readouterr()
        assert captured.err == "[DEBUG] hello\n"
        assert captured.out == ""

    def test_matcher_traces_results(self, capsys, monkeypatch):
        monkeypatch.setenv("OPTSPEC_DEBUG", "1")
        table = OptionTable.compile(["g+groups"])
        list(Matcher(table).iter_matches(["-g", "a"]))
        err = capsys.readouterr().err
        assert "[DEBUG] compile: 1 options" in err
        assert "collecting values for --groups" in err
        assert "Matched(option_char='g', value='a'" in err
        assert "End(residual_index=2)" in err
