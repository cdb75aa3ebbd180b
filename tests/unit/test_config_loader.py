"""Unit tests for taskcore.config.loader, taskcore.config.schema and
taskcore.schema.config."""
from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from taskcore.config.defaults import DEFAULT_CONFIG, DEFAULT_CONFIG_YAML
from taskcore.config.loader import ConfigLoader, _AUTO_SEARCH_PATHS
from taskcore.config.schema import validate_config
from taskcore.schema.config import AgentOptions, TaskCoreConfig
from taskcore.schema.errors import ConfigurationError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    import os

    for key in list(os.environ):
        if key.startswith("TASKCORE_"):
            monkeypatch.delenv(key)


# ---------------------------------------------------------------------------
# TaskCoreConfig / AgentOptions
# ---------------------------------------------------------------------------


class TestTaskCoreConfig:
    def test_defaults(self) -> None:
        config = TaskCoreConfig()
        assert config.session_name == "default-session"
        assert config.event_max_concurrency is None
        assert config.agent == AgentOptions()

    def test_log_level_normalised(self) -> None:
        assert TaskCoreConfig(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TaskCoreConfig(log_level="chatty")

    def test_agent_null_uses_defaults(self) -> None:
        assert TaskCoreConfig.model_validate({"agent": None}).agent == AgentOptions()

    def test_agent_options_bounds(self) -> None:
        with pytest.raises(ValidationError):
            AgentOptions(max_steps=0)


class TestFromEnv:
    def test_top_level_and_nested_fields(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TASKCORE_SESSION_NAME", "env-session")
        monkeypatch.setenv("TASKCORE_AGENT__USE_VISION", "TRUE")
        monkeypatch.setenv("TASKCORE_AGENT__USE_VISION_FOR_PLANNER", "no")
        monkeypatch.setenv("TASKCORE_AGENT__MAX_STEPS", "25")
        config = TaskCoreConfig.from_env()
        assert config.session_name == "env-session"
        assert config.agent.use_vision is True
        assert config.agent.use_vision_for_planner is False
        assert config.agent.max_steps == 25

    def test_custom_settings_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TASKCORE_CUSTOM_SETTINGS", '{"theme": "dark"}')
        assert TaskCoreConfig.from_env().custom_settings == {"theme": "dark"}

    def test_custom_settings_bad_json_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TASKCORE_CUSTOM_SETTINGS", "{not json")
        assert TaskCoreConfig.from_env().custom_settings == {}


class TestMerge:
    def test_non_default_override_wins(self) -> None:
        base = TaskCoreConfig(session_name="base", agent=AgentOptions(max_steps=10))
        override = TaskCoreConfig(agent=AgentOptions(use_vision=True))
        merged = base.merge(override)
        assert merged.session_name == "base"
        assert merged.agent.max_steps == 10
        assert merged.agent.use_vision is True

    def test_custom_settings_are_updated(self) -> None:
        base = TaskCoreConfig(custom_settings={"a": 1})
        override = TaskCoreConfig(custom_settings={"b": 2})
        assert base.merge(override).custom_settings == {"a": 1, "b": 2}

    def test_inputs_not_mutated(self) -> None:
        base = TaskCoreConfig(session_name="base")
        base.merge(TaskCoreConfig(session_name="other"))
        assert base.session_name == "base"


# validate_config
# ---------------------------------------------------------------------------


class TestValidateConfig:
    def test_valid_minimal_dict(self) -> None:
        assert isinstance(validate_config({}), TaskCoreConfig)

    def test_invalid_data_raises_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            validate_config({"event_max_concurrency": 0})
        assert exc_info.value.__cause__ is not None
        assert exc_info.value.context["errors"]

    def test_session_section_reported(self) -> None:
        with pytest.raises(ConfigurationError, match="event_max_concurrency") as exc_info:
            validate_config({"event_max_concurrency": 0}, source="taskcore.yaml")
        assert exc_info.value.context["sections"] == ["session"]
        assert exc_info.value.context["source"] == "taskcore.yaml"

    def test_agent_section_reported(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid agent options") as exc_info:
            validate_config({"agent": {"max_steps": 0}})
        assert exc_info.value.context["sections"] == ["agent"]
        assert "agent.max_steps" in str(exc_info.value)

    def test_both_sections_reported(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            validate_config({"log_level": "chatty", "agent": {"use_vision": "sometimes"}})
        assert exc_info.value.context["sections"] == ["agent", "session"]


# ---------------------------------------------------------------------------
# ConfigLoader
# ---------------------------------------------------------------------------


class TestConfigLoaderFiles:
    def test_load_valid_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "taskcore.yaml"
        config_file.write_text("session_name: yaml-session\n", encoding="utf-8")
        assert ConfigLoader().load_file(config_file).session_name == "yaml-session"

    def test_default_yaml_template_matches_schema(self, tmp_path: Path) -> None:
        path = tmp_path / "taskcore.yaml"
        path.write_text(DEFAULT_CONFIG_YAML, encoding="utf-8")
        config = ConfigLoader().load_file(path)
        assert config.session_name == "my-session"
        assert config.agent == AgentOptions()

    def test_load_valid_json(self, tmp_path: Path) -> None:
        config_file = tmp_path / "taskcore.json"
        config_file.write_text(json.dumps({"agent": {"max_steps": 5}}), encoding="utf-8")
        assert ConfigLoader().load_file(config_file).agent.max_steps == 5

    def test_empty_file_yields_defaults(self, tmp_path: Path) -> None:
        empty = tmp_path / "taskcore.yml"
        empty.write_text("", encoding="utf-8")
        assert ConfigLoader().load_file(empty) == DEFAULT_CONFIG

    @pytest.mark.parametrize("name", ["nonexistent.yaml", "absent.json"])
    def test_missing_file_raises(self, tmp_path: Path, name: str) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            ConfigLoader().load_file(tmp_path / name)

    @pytest.mark.parametrize(
        ("name", "text"),
        [("bad.yaml", "key: [unclosed\n"), ("bad.json", "{")],
    )
    def test_unparsable_file_raises(self, tmp_path: Path, name: str, text: str) -> None:
        bad = tmp_path / name
        bad.write_text(text, encoding="utf-8")
        with pytest.raises(ConfigurationError, match="parse"):
            ConfigLoader().load_file(bad)

    def test_non_mapping_file_raises(self, tmp_path: Path) -> None:
        non_mapping = tmp_path / "list.yaml"
        non_mapping.write_text("- one\n- two\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="must be a mapping, got list"):
            ConfigLoader().load_file(non_mapping)

    def test_unsupported_suffix_raises(self, tmp_path: Path) -> None:
        toml = tmp_path / "taskcore.toml"
        toml.write_text("session_name = 'x'\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Unsupported config format"):
            ConfigLoader().load_file(toml)

    def test_invalid_agent_option_names_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "taskcore.yaml"
        config_file.write_text("agent:\n  max_steps: 0\n", encoding="utf-8")
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader().load_file(config_file)
        assert exc_info.value.context["source"] == str(config_file)
        assert exc_info.value.context["sections"] == ["agent"]


class TestConfigLoaderEnv:
    def test_invalid_env_value_raises_configuration_error(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TASKCORE_AGENT__MAX_STEPS", "many")
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader().load_env()
        assert exc_info.value.context["source"] == "TASKCORE_* environment"
        assert exc_info.value.context["sections"] == ["agent"]

    def test_invalid_session_env_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TASKCORE_EVENT_MAX_CONCURRENCY", "0")
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader().load_env()
        assert exc_info.value.context["sections"] == ["session"]


class TestConfigLoaderAuto:
    def test_search_paths_prefer_yaml(self) -> None:
        assert _AUTO_SEARCH_PATHS[0] == "taskcore.yaml"

    def test_falls_back_to_default(self, tmp_path: Path) -> None:
        assert ConfigLoader().load_auto(search_dir=tmp_path) == DEFAULT_CONFIG

    def test_finds_yaml(self, tmp_path: Path) -> None:
        (tmp_path / "taskcore.yaml").write_text("session_name: found\n", encoding="utf-8")
        assert ConfigLoader().load_auto(search_dir=tmp_path).session_name == "found"

    def test_finds_hidden_json(self, tmp_path: Path) -> None:
        (tmp_path / ".taskcore.json").write_text('{"session_name": "hidden"}', encoding="utf-8")
        assert ConfigLoader().load_auto(search_dir=tmp_path).session_name == "hidden"

    def test_broken_file_is_an_error(self, tmp_path: Path) -> None:
        (tmp_path / "taskcore.yaml").write_text("key: [unclosed\n", encoding="utf-8")
        (tmp_path / "taskcore.json").write_text('{"session_name": "json"}', encoding="utf-8")
        with pytest.raises(ConfigurationError, match="parse"):
            ConfigLoader().load_auto(search_dir=tmp_path)

    def test_env_overlay_applied(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "taskcore.yaml").write_text("session_name: file\n", encoding="utf-8")
        monkeypatch.setenv("TASKCORE_AGENT__USE_VISION", "true")
        config = ConfigLoader().load_auto(search_dir=tmp_path)
        assert config.session_name == "file"
        assert config.agent.use_vision is True
