import pytest
from splinetraj import config


@pytest.mark.parametrize("raw", ["0.5", "0", "-3", "abc", "16.0"])
def test_env_int_rejects_invalid_values(monkeypatch, raw):
    monkeypatch.setenv("SPLINETRAJ_TEST_INT", raw)
    assert config._env_int("SPLINETRAJ_TEST_INT", 16) == 16


def test_env_int_accepts_positive_integer(monkeypatch):
    monkeypatch.setenv("SPLINETRAJ_TEST_INT", " 4 ")
    assert config._env_int("SPLINETRAJ_TEST_INT", 16) == 4


def test_env_int_unset_uses_default(monkeypatch):
    monkeypatch.delenv("SPLINETRAJ_TEST_INT", raising=False)
    assert config._env_int("SPLINETRAJ_TEST_INT", 16) == 16


def test_arc_length_oversample_is_positive_int():
    assert isinstance(config.ARC_LENGTH_OVERSAMPLE, int)
    assert config.ARC_LENGTH_OVERSAMPLE >= 1


@pytest.mark.parametrize("raw,expected", [("1", True), ("on", True), ("0", False), ("", False)])
def test_trace_flag_parsing(monkeypatch, raw, expected):
    monkeypatch.setenv("SPLINETRAJ_TRACE", raw)
    assert config._env_flag("SPLINETRAJ_TRACE") is expected
