"""Unit tests for configuration setup and validation."""

import pytest

from nlgit.config.manager import ConfigManager, create_config_manager
from nlgit.config.templates import CONFIG_TEMPLATE


def write_config(config_dir, **overrides):
    """Initialize config_dir with templates, then apply top-level overrides."""
    ConfigManager(config_dir).initialize()
    text = CONFIG_TEMPLATE
    for key, value in overrides.items():
        text += f"\n{key}: {value}\n"
    (config_dir / "config.yaml").write_text(text)


class TestConfigManager:
    """Test cases for ConfigManager."""

    def test_first_run_generates_templates(self, tmp_path):
        config_dir = tmp_path / "nlgit"
        manager = ConfigManager(config_dir)

        assert manager.initialize() is False
        assert manager.config_file.exists()
        assert manager.payload_file.exists()
        assert manager.response_path_file.exists()
        assert manager.is_initialized() is False

    def test_second_run_loads_defaults(self, tmp_path):
        config_dir = tmp_path / "nlgit"
        ConfigManager(config_dir).initialize()
        manager = ConfigManager(config_dir)

        assert manager.initialize() is True
        assert manager.get("model") == "llama3.2:latest"
        assert manager.get("request_timeout") == 60
        assert manager.get("history_limit") == 50
        assert manager.get("max_diff_chars") == 4000
        assert manager.get("enable_debug") is False
        assert manager.get("api_key") is None
        assert manager.history_file == config_dir / "history.json"

    def test_config_is_a_copy(self, tmp_path):
        config_dir = tmp_path / "nlgit"
        ConfigManager(config_dir).initialize()
        manager = ConfigManager(config_dir)
        manager.initialize()

        manager.config["model"] = "changed"

        assert manager.get("model") == "llama3.2:latest"

    def test_config_before_initialize_raises(self, tmp_path):
        with pytest.raises(RuntimeError):
            ConfigManager(tmp_path).config

    @pytest.mark.parametrize("key,value", [
        ("request_timeout", 0),
        ("request_timeout", "soon"),
        ("history_limit", -1),
        ("history_limit", "true"),
        ("max_diff_chars", -5),
    ])
    def test_invalid_numbers_exit(self, tmp_path, key, value):
        config_dir = tmp_path / "nlgit"
        write_config(config_dir, **{key: value})

        with pytest.raises(SystemExit) as exc_info:
            ConfigManager(config_dir).initialize()
        assert exc_info.value.code == 1

    def test_missing_required_field_exits(self, tmp_path):
        config_dir = tmp_path / "nlgit"
        write_config(config_dir, model='""')

        with pytest.raises(SystemExit):
            ConfigManager(config_dir).initialize()

    def test_invalid_yaml_exits(self, tmp_path):
        config_dir = tmp_path / "nlgit"
        ConfigManager(config_dir).initialize()
        (config_dir / "config.yaml").write_text("endpoint: [unclosed\n")

        with pytest.raises(SystemExit):
            ConfigManager(config_dir).initialize()

    def test_invalid_debug_flag_defaults_to_false(self, tmp_path):
        config_dir = tmp_path / "nlgit"
        write_config(config_dir, enable_debug='"verbose"')
        manager = ConfigManager(config_dir)

        assert manager.initialize() is True
        assert manager.get("enable_debug") is False

    def test_create_config_manager_exits_after_setup(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            create_config_manager(tmp_path / "nlgit")
        assert exc_info.value.code == 0

    def test_create_config_manager_returns_loaded_manager(self, tmp_path):
        config_dir = tmp_path / "nlgit"
        ConfigManager(config_dir).initialize()

        manager = create_config_manager(config_dir)

        assert manager.is_initialized() is True
