from __future__ import annotations

import os

import pytest

from tweetdrop.config import (
    ConfigurationError,
    MissingConfigurationError,
    env_bool,
    env_float,
    env_int,
    optional_env_var,
    require_env_var,
    require_env_vars,
)
from tweetdrop.domain.errors import TweetdropError


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_raises_when_any_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_VAR", raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_VAR"])

    assert "MISSING_VAR" in str(exc.value)


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


def test_configuration_errors_are_fatal_pipeline_errors() -> None:
    assert issubclass(MissingConfigurationError, ConfigurationError)
    assert issubclass(ConfigurationError, TweetdropError)


def test_optional_env_var_strips_and_treats_blank_as_unset(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  value ")
    monkeypatch.setenv("BLANK_VAR", " ")

    assert optional_env_var("EXAMPLE_VAR") == "value"
    assert optional_env_var("BLANK_VAR") is None
    assert os.getenv("BLANK_VAR") == " "


def test_env_int_and_float(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INT_VAR", "12")
    monkeypatch.setenv("FLOAT_VAR", "2.5")
    monkeypatch.delenv("UNSET_VAR", raising=False)

    assert env_int("INT_VAR", 1) == 12
    assert env_int("UNSET_VAR", 1) == 1
    assert env_float("FLOAT_VAR", 1.0) == 2.5


def test_env_int_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INT_VAR", "twelve")

    with pytest.raises(ConfigurationError, match="INT_VAR"):
        env_int("INT_VAR", 1)


@pytest.mark.parametrize(("raw", "expected"), [("1", True), ("Yes", True), ("off", False)])
def test_env_bool(monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool) -> None:  # noqa: FBT001
    monkeypatch.setenv("BOOL_VAR", raw)

    assert env_bool("BOOL_VAR") is expected


def test_env_bool_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BOOL_VAR", "maybe")

    with pytest.raises(ConfigurationError):
        env_bool("BOOL_VAR")
