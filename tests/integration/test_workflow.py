"""Integration tests for end-to-end workflows."""

import dataclasses
from pathlib import Path

import pytest

from envied.core.generator import Generator, generate_from_config_file
from envied.models.field import Field, FieldType
from envied.models.generation import EmissionFormat
from envied.utils.config import load_config


class TestMergedWorkflow:
    """Generate the merged module and use it."""

    @pytest.fixture
    def module(self, config_file: Path, import_generated):
        """Generate and import the merged module."""
        result = generate_from_config_file(config_file)
        return import_generated(result.output_paths[0])

    def test_dev_values(self, module):
        config = module.DevConfig.load()
        assert config.GetTOKEN() == "dev_token_123"
        assert config.GetAPI_URL() == "https://dev-api.example.com"
        assert config.GetPORT() == 8080
        assert config.GetDEBUG() is True
        assert config.GetTIMEOUT() == 30.5
        assert config.GetEMPTY_VALUE() == ""

    def test_prod_values(self, module):
        config = module.new_config("prod")
        assert isinstance(config, module.ProdConfig)
        assert config.GetTOKEN() == "prod_token_456"
        assert config.GetPORT() == 80
        assert config.GetDEBUG() is False
        assert config.GetTIMEOUT() == 60.0

    def test_interface(self, module):
        for name in ("dev", "prod"):
            assert isinstance(module.new_config(name), module.ConfigInterface)

    def test_registry(self, module):
        assert list(module.ENVIRONMENTS) == ["dev", "prod"]
        with pytest.raises(KeyError):
            module.new_config("stage")

    def test_config_is_frozen(self, module):
        config = module.DevConfig.load()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.PORT = 1

    def test_secrets_not_in_source(self, config_file: Path):
        result = generate_from_config_file(config_file)
        source = result.output_paths[0].read_text()
        assert "dev_token_123" not in source
        assert "prod_token_456" not in source
        assert "30.5" not in source
        assert "8080" in source

    def test_regeneration_is_identical(self, config_file: Path):
        first = generate_from_config_file(config_file).output_paths[0].read_text()
        second = generate_from_config_file(config_file).output_paths[0].read_text()
        assert first == second


class TestPackedWorkflow:
    """Packed format round trip."""

    def test_packed_module(self, config_file: Path, import_generated):
        config = load_config(config_file).model_copy(update={"format": EmissionFormat.PACKED})
        result = Generator(config).generate()
        module = import_generated(result.output_paths[0])

        dev = module.new_config("dev")
        assert dev.GetTOKEN() == "dev_token_123"
        assert dev.GetTIMEOUT() == 30.5
        assert dev.GetEMPTY_VALUE() == ""


class TestSingleEnvironmentWorkflow:
    """Single-environment generation."""

    def test_from_env_file(self, config_file: Path, prod_env_file: Path, import_generated):
        generator = Generator(load_config(config_file))
        result = generator.generate_from_env_file(prod_env_file, "prod", "ProdConfig")
        assert result.output_paths[0].name == "config_prod.py"

        module = import_generated(result.output_paths[0])
        config = module.ProdConfig.load()
        assert config.GetAPI_URL() == "https://api.example.com"
        assert config.GetPORT() == 80

    def test_from_env_vars(self, config_file: Path, import_generated):
        generator = Generator(load_config(config_file))
        fields = [
            Field(name="API_KEY", type=FieldType.STRING),
            Field(name="RETRIES", type=FieldType.INT, default_value="3"),
            Field(name="RATIO", type=FieldType.FLOAT, optional=True),
        ]
        result = generator.generate_from_env_vars(
            fields, "ci", "CiConfig", environ={"API_KEY": "secret-key"}
        )

        module = import_generated(result.output_paths[0])
        config = module.new_config("ci")
        assert config.GetAPI_KEY() == "secret-key"
        assert config.GetRETRIES() == 3
        assert config.GetRATIO() == 0.0
