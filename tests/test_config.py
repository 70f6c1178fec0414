"""Tests for parser configuration."""

import pytest

from outcome_map.config import ParserConfig
from outcome_map.exceptions import ConfigurationError, OutcomeMapError


def test_defaults():
    config = ParserConfig()

    assert config.encoding == "auto"
    assert config.decimal_sep == ","
    assert config.aggregate is True
    assert config.agg_method == "average"
    assert config.delimiter is None


def test_aliases_are_canonicalized():
    config = ParserConfig(encoding="Latin-1", agg_method="MEAN", delimiter="tab")

    assert config.encoding == "iso-8859-1"
    assert config.agg_method == "average"
    assert config.delimiter == "\t"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"encoding": "utf-16"},
        {"decimal_sep": ";"},
        {"agg_method": "mode"},
        {"delimiter": ":"},
    ],
)
def test_invalid_values_raise(kwargs):
    with pytest.raises(ConfigurationError):
        ParserConfig(**kwargs)


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        ParserConfig(agg_method="sum")
    assert issubclass(ConfigurationError, OutcomeMapError)


def test_config_is_immutable():
    config = ParserConfig()

    with pytest.raises(AttributeError):
        config.encoding = "utf-8"


def test_replace_returns_new_validated_config():
    config = ParserConfig()

    changed = config.replace(agg_method="Median", aggregate=False)

    assert changed.agg_method == "median"
    assert changed.aggregate is False
    assert config.agg_method == "average"


def test_from_env(monkeypatch):
    monkeypatch.setenv("OUTCOME_MAP_ENCODING", "utf-8")
    monkeypatch.setenv("OUTCOME_MAP_DECIMAL_SEP", ".")
    monkeypatch.setenv("OUTCOME_MAP_AGGREGATE", "no")
    monkeypatch.setenv("OUTCOME_MAP_AGG_METHOD", "max")
    monkeypatch.setenv("OUTCOME_MAP_DELIMITER", ";")

    config = ParserConfig.from_env()

    assert config == ParserConfig(
        encoding="utf-8", decimal_sep=".", aggregate=False, agg_method="max", delimiter=";"
    )


def test_from_env_defaults(monkeypatch):
    for name in (
        "OUTCOME_MAP_ENCODING",
        "OUTCOME_MAP_DECIMAL_SEP",
        "OUTCOME_MAP_AGGREGATE",
        "OUTCOME_MAP_AGG_METHOD",
        "OUTCOME_MAP_DELIMITER",
    ):
        monkeypatch.delenv(name, raising=False)

    assert ParserConfig.from_env() == ParserConfig()
