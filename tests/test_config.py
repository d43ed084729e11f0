"""Tests for configuration loading and saving."""

import json

import pytest
import yaml

from smashlog.core.config import (
    ConfigError,
    SmashlogConfig,
    config_to_dict,
    dict_to_config,
    generate_default_config,
    load_config,
    load_config_file,
    load_env_config,
    merge_configs,
    save_config,
)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep config discovery away from the real home and working directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / ".config"))
    for var in ("SMASHLOG_ENCODING", "SMASHLOG_BAR_WIDTH", "SMASHLOG_BAR_CHAR",
                "SMASHLOG_EXPORT_FORMAT", "SMASHLOG_LOG_LEVEL", "SMASHLOG_LOG_FILE"):
        monkeypatch.delenv(var, raising=False)
    yield


class TestDefaults:
    """Tests for default values."""

    def test_display_defaults(self):
        """Verify the bar chart defaults."""
        config = SmashlogConfig()
        assert config.display.bar_width == 30
        assert config.display.bar_char == "#"
        assert config.display.ratio_precision == 1

    def test_load_without_sources(self):
        """Verify defaults are used when nothing is configured."""
        assert load_config() == SmashlogConfig()


class TestConfigFiles:
    """Tests for file formats."""

    def test_yaml(self, tmp_path):
        """Verify YAML files load."""
        path = tmp_path / "c.yaml"
        path.write_text("display:\n  bar_width: 20\n")
        assert load_config_file(path) == {"display": {"bar_width": 20}}

    def test_toml(self, tmp_path):
        """Verify TOML files load."""
        path = tmp_path / "c.toml"
        path.write_text("[export]\ndefault_format = \"csv\"\n")
        assert load_config(path).export.default_format == "csv"

    def test_json(self, tmp_path):
        """Verify JSON files load."""
        path = tmp_path / "c.json"
        path.write_text(json.dumps({"parser": {"encoding": "latin-1"}}))
        assert load_config(path).parser.encoding == "latin-1"

    def test_missing_file(self, tmp_path):
        """Verify a missing file yields no settings."""
        assert load_config_file(tmp_path / "absent.yaml") == {}

    def test_unknown_extension(self, tmp_path):
        """Verify unknown extensions are ignored."""
        path = tmp_path / "c.ini"
        path.write_text("[display]\n")
        assert load_config_file(path) == {}

    def test_discovered_in_cwd(self, tmp_path):
        """Verify smashlog.yaml in the working directory is found."""
        (tmp_path / "smashlog.yaml").write_text("logging:\n  level: DEBUG\n")
        assert load_config().logging.level == "DEBUG"

    def test_discovered_in_xdg_dir(self, tmp_path):
        """Verify the XDG config directory is searched after the working directory."""
        config_dir = tmp_path / ".config" / "smashlog"
        config_dir.mkdir(parents=True)
        (config_dir / "config.toml").write_text("[display]\nbar_width = 18\n")
        assert load_config().display.bar_width == 18

        (tmp_path / "smashlog.json").write_text('{"display": {"bar_width": 9}}')
        assert load_config().display.bar_width == 9


class TestEnvironment:
    """Tests for SMASHLOG_* environment variables."""

    def test_env_values_are_raw_strings(self, monkeypatch):
        """Verify env values are collected unconverted."""
        monkeypatch.setenv("SMASHLOG_BAR_WIDTH", "40")
        monkeypatch.setenv("SMASHLOG_BAR_CHAR", "=")
        assert load_env_config() == {"display": {"bar_width": "40", "bar_char": "="}}

    def test_env_values_take_field_types(self, monkeypatch):
        """Verify env strings become the field's type when loaded."""
        monkeypatch.setenv("SMASHLOG_BAR_WIDTH", "40")
        monkeypatch.setenv("SMASHLOG_BAR_CHAR", "8")
        config = load_config()
        assert config.display.bar_width == 40
        assert config.display.bar_char == "8"

    def test_invalid_env_value(self, monkeypatch):
        """Verify a non-numeric width is rejected."""
        monkeypatch.setenv("SMASHLOG_BAR_WIDTH", "wide")
        with pytest.raises(ConfigError, match="display.bar_width"):
            load_config()

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        """Verify env vars take precedence over the config file."""
        path = tmp_path / "c.yaml"
        path.write_text("display:\n  bar_width: 20\n  ratio_precision: 2\n")
        monkeypatch.setenv("SMASHLOG_BAR_WIDTH", "50")

        config = load_config(path)
        assert config.display.bar_width == 50
        assert config.display.ratio_precision == 2

    def test_env_can_be_excluded(self, monkeypatch):
        """Verify include_env=False ignores the environment."""
        monkeypatch.setenv("SMASHLOG_BAR_WIDTH", "50")
        assert load_config(include_env=False).display.bar_width == 30


class TestMerging:
    """Tests for merge_configs() and dict_to_config()."""

    def test_recursive_merge(self):
        """Verify nested sections merge key by key."""
        base = {"display": {"bar_width": 10, "bar_char": "#"}}
        override = {"display": {"bar_width": 20}, "logging": {"level": "INFO"}}
        assert merge_configs(base, override) == {
            "display": {"bar_width": 20, "bar_char": "#"},
            "logging": {"level": "INFO"},
        }

    def test_unknown_keys_ignored(self):
        """Verify unknown sections and keys are dropped."""
        config = dict_to_config({"display": {"nope": 1}, "taxonomy": {"s": "attack"}})
        assert config == SmashlogConfig()


class TestValueTypes:
    """Tests for converting values to their field types."""

    def test_quoted_numbers_and_booleans(self):
        """Verify quoted numbers and boolean words are converted."""
        config = dict_to_config({
            "display": {"bar_width": "25", "show_unknown_codes": "no"},
            "export": {"include_metadata": "true"},
        })
        assert config.display.bar_width == 25
        assert config.display.show_unknown_codes is False
        assert config.export.include_metadata is True

    def test_numeric_string_fields(self):
        """Verify numbers given for text fields become strings."""
        config = dict_to_config({"display": {"bar_char": 8}})
        assert config.display.bar_char == "8"

    def test_optional_field_accepts_none(self):
        """Verify the log file may be null."""
        assert dict_to_config({"logging": {"file": None}}).logging.file is None

    @pytest.mark.parametrize(
        "data",
        [
            {"display": {"bar_width": "thirty"}},
            {"display": {"bar_width": True}},
            {"display": {"bar_char": ["#"]}},
            {"export": {"include_metadata": "maybe"}},
            {"display": ["bar_width"]},
            ["display"],
        ],
    )
    def test_wrong_types_rejected(self, data):
        """Verify values that cannot be converted raise ConfigError."""
        with pytest.raises(ConfigError):
            dict_to_config(data)

    def test_bad_yaml_value_in_file(self, tmp_path):
        """Verify type errors surface from load_config."""
        path = tmp_path / "c.yaml"
        path.write_text("display:\n  ratio_precision: high\n")
        with pytest.raises(ConfigError, match="display.ratio_precision"):
            load_config(path)


class TestSaving:
    """Tests for writing configuration files."""

    def test_yaml_round_trip(self, tmp_path):
        """Verify a saved YAML config loads back unchanged."""
        config = SmashlogConfig()
        config.display.bar_width = 12
        path = tmp_path / "saved.yaml"
        save_config(config, path)
        assert load_config(path, include_env=False) == config

    def test_json_round_trip(self, tmp_path):
        """Verify a saved JSON config matches config_to_dict."""
        path = tmp_path / "saved.json"
        save_config(SmashlogConfig(), path)
        assert json.loads(path.read_text()) == config_to_dict(SmashlogConfig())

    def test_unsupported_format(self, tmp_path):
        """Verify unsupported save formats raise."""
        with pytest.raises(ValueError):
            save_config(SmashlogConfig(), tmp_path / "saved.toml")

    def test_generate_default_yaml(self, tmp_path):
        """Verify the default template parses to the default config."""
        path = tmp_path / "smashlog.yaml"
        generate_default_config(path)
        data = yaml.safe_load(path.read_text())
        assert dict_to_config(data) == SmashlogConfig()

