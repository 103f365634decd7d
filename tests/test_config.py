import pytest

from menu_engine.config import ConfigError, MenuConfig
from menu_engine.matching import MatchPolicy
from menu_engine.paging import LayoutMode


def test_defaults() -> None:
    config = MenuConfig()

    assert config.case_sensitive is True
    assert config.policy is MatchPolicy.FUZZY
    assert config.layout is LayoutMode.HORIZONTAL
    assert config.word_delimiters == " "
    assert config.max_query_bytes == 8192


def test_positive_lines_select_vertical_layout() -> None:
    config = MenuConfig(lines=5)

    assert config.layout is LayoutMode.VERTICAL
    assert config.require_budget() == 0


def test_policy_accepts_plain_strings() -> None:
    assert MenuConfig(policy="substring").policy is MatchPolicy.SUBSTRING


@pytest.mark.parametrize(
    ("kwargs", "option"),
    [
        ({"policy": "regex"}, "policy"),
        ({"lines": -1}, "lines"),
        ({"budget": 0}, "budget"),
        ({"word_delimiters": ""}, "delimiters"),
        ({"word_delimiters": " \u00a0"}, "delimiters"),
        ({"max_query_bytes": 0}, "max_query_bytes"),
    ],
)
def test_invalid_values_raise_config_error(kwargs, option) -> None:
    with pytest.raises(ConfigError) as excinfo:
        MenuConfig(**kwargs)

    assert excinfo.value.option == option


def test_horizontal_layout_requires_budget() -> None:
    config = MenuConfig()

    with pytest.raises(ConfigError):
        config.require_budget()
    assert config.with_budget(40).require_budget() == 40


def test_from_env_reads_prefixed_variables() -> None:
    env = {
        "MENU_ENGINE_LINES": "12",
        "MENU_ENGINE_MAX_QUERY_BYTES": "64",
        "MENU_ENGINE_IGNORE_CASE": "yes",
        "MENU_ENGINE_POLICY": "SUBSTRING",
        "MENU_ENGINE_DELIMITERS": " /",
        "MENU_ENGINE_PROMPT": "run:",
    }

    config = MenuConfig.from_env(env)

    assert config.lines == 12
    assert config.max_query_bytes == 64
    assert config.case_sensitive is False
    assert config.policy is MatchPolicy.SUBSTRING
    assert config.word_delimiters == " /"
    assert config.prompt == "run:"


def test_from_env_overrides_win() -> None:
    config = MenuConfig.from_env({"MENU_ENGINE_LINES": "12"}, lines=3, prompt=None)

    assert config.lines == 3
    assert config.prompt == ""


def test_from_env_rejects_non_integer_values() -> None:
    with pytest.raises(ConfigError) as excinfo:
        MenuConfig.from_env({"MENU_ENGINE_LINES": "many"})

    assert excinfo.value.option == "MENU_ENGINE_LINES"


def test_config_is_immutable() -> None:
    config = MenuConfig()

    with pytest.raises(AttributeError):
        config.lines = 4  # type: ignore[misc]
