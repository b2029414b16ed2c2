"""Unit tests for run configuration loading."""

import json
from pathlib import Path

import pytest

from envied.models.generation import EmissionFormat
from envied.utils.config import (
    DEFAULT_OUTPUT_FILE,
    EnviedConfig,
    EnvironmentConfig,
    find_config_file,
    load_config,
    parse_config,
)
from envied.utils.errors import MalformedConfigError


class TestEnviedConfig:
    """Tests for the EnviedConfig model."""

    def test_defaults(self):
        config = EnviedConfig(
            environments={"dev": EnvironmentConfig(env_file=Path(".env"), struct_name="DevConfig")}
        )
        assert config.package_name == "config"
        assert config.random_seed == 0
        assert config.format == EmissionFormat.ARRAYS
        assert config.reference_environment is None
        assert config.output_path == Path(".") / DEFAULT_OUTPUT_FILE

    def test_environment_order_preserved(self, config_data: dict):
        config = parse_config(config_data)
        assert list(config.environments) == ["dev", "prod"]

    def test_format_from_string(self, config_data: dict):
        config_data["format"] = "packed"
        assert parse_config(config_data).format == EmissionFormat.PACKED


class TestParseConfig:
    """Tests for parse_config validation."""

    def test_not_a_mapping(self):
        with pytest.raises(MalformedConfigError):
            parse_config(["not", "a", "mapping"])

    def test_missing_environments(self):
        with pytest.raises(MalformedConfigError) as exc_info:
            parse_config({"package_name": "x"})
        assert exc_info.value.code == "MALFORMED_CONFIG"

    def test_empty_environments(self):
        with pytest.raises(MalformedConfigError):
            parse_config({"environments": {}})

    def test_invalid_struct_name(self):
        with pytest.raises(MalformedConfigError):
            parse_config({"environments": {"dev": {"env_file": "a", "struct_name": "Dev Config"}}})

    def test_missing_env_file(self):
        with pytest.raises(MalformedConfigError):
            parse_config({"environments": {"dev": {"struct_name": "DevConfig"}}})

    def test_unknown_reference_environment(self, config_data: dict):
        config_data["reference_environment"] = "stage"
        with pytest.raises(MalformedConfigError):
            parse_config(config_data)

    def test_bad_seed_type(self, config_data: dict):
        config_data["random_seed"] = "not-a-number"
        with pytest.raises(MalformedConfigError):
            parse_config(config_data)


class TestLoadConfig:
    """Tests for load_config."""

    def test_load_json(self, config_file: Path, config_data: dict):
        config = load_config(config_file)
        assert config.package_name == "testconfig"
        assert config.random_seed == 12345
        assert config.environments["dev"].struct_name == "DevConfig"
        assert config.environments["dev"].env_file == Path(config_data["environments"]["dev"]["env_file"])

    def test_load_yaml(self, tmp_path: Path):
        path = tmp_path / "envied.yaml"
        path.write_text(
            "package_name: app\n"
            "random_seed: 7\n"
            "environments:\n"
            "  dev:\n"
            "    env_file: .env.dev\n"
            "    struct_name: DevConfig\n"
        )
        config = load_config(path)
        assert config.package_name == "app"
        assert config.random_seed == 7

    def test_relative_paths_resolved(self, tmp_path: Path):
        path = tmp_path / "envied.json"
        path.write_text(
            json.dumps(
                {
                    "output_dir": "generated",
                    "environments": {"dev": {"env_file": ".env.dev", "struct_name": "DevConfig"}},
                }
            )
        )
        config = load_config(path)
        assert config.output_dir == tmp_path / "generated"
        assert config.environments["dev"].env_file == tmp_path / ".env.dev"

    def test_absolute_paths_kept(self, config_file: Path, config_data: dict):
        config = load_config(config_file)
        assert config.output_dir == Path(config_data["output_dir"])

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(MalformedConfigError):
            load_config(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "envied.json"
        path.write_text("{not json")
        with pytest.raises(MalformedConfigError) as exc_info:
            load_config(path)
        assert exc_info.value.details["path"] == str(path)

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "envied.yaml"
        path.write_text("environments: [unclosed")
        with pytest.raises(MalformedConfigError):
            load_config(path)


class TestFindConfigFile:
    """Tests for find_config_file."""

    def test_in_start_directory(self, tmp_path: Path):
        (tmp_path / "envied.json").write_text("{}")
        assert find_config_file(tmp_path) == (tmp_path / "envied.json").resolve()

    def test_in_parent_directory(self, tmp_path: Path):
        (tmp_path / "envied.yaml").write_text("")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == (tmp_path / "envied.yaml").resolve()

    def test_legacy_name(self, tmp_path: Path):
        (tmp_path / "go-envied-config.json").write_text("{}")
        assert find_config_file(tmp_path).name == "go-envied-config.json"

    def test_too_far_up(self, tmp_path: Path):
        (tmp_path / "envied.json").write_text("{}")
        nested = tmp_path / "a" / "b" / "c" / "d"
        nested.mkdir(parents=True)
        assert find_config_file(nested, max_levels=3) is None
