"""Run configuration for envied.

A run configuration maps environment names to their definition files and
generated class names::

    {
      "package_name": "config",
      "output_dir": "generated",
      "random_seed": 12345,
      "environments": {
        "dev": {"env_file": ".env.dev", "struct_name": "DevConfig"},
        "prod": {"env_file": ".env.prod", "struct_name": "ProdConfig"}
      }
    }

JSON and YAML files are both accepted.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from envied.models.generation import EmissionFormat
from envied.utils.errors import MalformedConfigError

CONFIG_FILE_NAMES = (
    "envied.json",
    "envied.yaml",
    "envied.yml",
    "go-envied-config.json",
)

DEFAULT_OUTPUT_FILE = "config_env_gen.py"


class EnvironmentConfig(BaseModel):
    """Source file and class name for one environment."""

    env_file: Path = Field(description="Path to the KEY=VALUE definitions file")
    struct_name: str = Field(description="Name of the generated configuration class")

    @field_validator("struct_name")
    @classmethod
    def _identifier(cls, value: str) -> str:
        if not value.isidentifier():
            raise ValueError(f"struct_name must be a valid identifier, got {value!r}")
        return value


class EnviedConfig(BaseModel):
    """Main configuration for a generation run."""

    package_name: str = Field(default="config", description="Label of the generated package")
    output_dir: Path = Field(default=Path("."), description="Directory for generated files")
    output_file: str = Field(default=DEFAULT_OUTPUT_FILE, description="Generated module file name")
    random_seed: int = Field(default=0, description="Obfuscation seed, 0 randomizes")
    format: EmissionFormat = Field(default=EmissionFormat.ARRAYS, description="Obfuscation layout")
    reference_environment: str | None = Field(
        default=None, description="Environment whose fields define the shared interface"
    )
    environments: dict[str, EnvironmentConfig] = Field(description="Environments by name")

    @field_validator("environments")
    @classmethod
    def _not_empty(cls, value: dict[str, EnvironmentConfig]) -> dict[str, EnvironmentConfig]:
        if not value:
            raise ValueError("at least one environment is required")
        return value

    @model_validator(mode="after")
    def _known_reference(self) -> "EnviedConfig":
        if self.reference_environment and self.reference_environment not in self.environments:
            raise ValueError(
                f"reference_environment {self.reference_environment!r} is not a configured environment"
            )
        return self

    @property
    def output_path(self) -> Path:
        """Full path of the generated module."""
        return self.output_dir / self.output_file

    def resolve_paths(self, base_dir: Path) -> "EnviedConfig":
        """Return a copy with relative paths anchored at ``base_dir``."""
        environments = {
            name: env.model_copy(update={"env_file": _anchor(env.env_file, base_dir)})
            for name, env in self.environments.items()
        }
        return self.model_copy(
            update={
                "output_dir": _anchor(self.output_dir, base_dir),
                "environments": environments,
            }
        )


def _anchor(path: Path, base_dir: Path) -> Path:
    return path if path.is_absolute() else base_dir / path


def parse_config(data: Any, source: str | Path | None = None) -> EnviedConfig:
    """Validate already-decoded configuration data.

    Raises:
        MalformedConfigError: If the data does not have the required shape
    """
    if not isinstance(data, dict):
        raise MalformedConfigError("Configuration must be a mapping", path=source)
    try:
        return EnviedConfig.model_validate(data)
    except ValidationError as e:
        raise MalformedConfigError(f"Invalid configuration: {e}", path=source) from e


def load_config(config_path: Path | str) -> EnviedConfig:
    """Load a run configuration from a JSON or YAML file.

    Relative ``env_file`` and ``output_dir`` values are resolved against
    the directory containing the configuration file.

    Args:
        config_path: Path to the configuration file

    Returns:
        Validated configuration

    Raises:
        MalformedConfigError: If the file cannot be read or parsed
    """
    path = Path(config_path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise MalformedConfigError(f"Failed to read config file {path}: {e}", path=path) from e

    try:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise MalformedConfigError(f"Failed to parse config file {path}: {e}", path=path) from e

    return parse_config(data, source=path).resolve_paths(path.parent)


def find_config_file(start: Path | str | None = None, max_levels: int = 3) -> Path | None:
    """Search ``start`` and up to ``max_levels`` parents for a config file.

    Args:
        start: Directory to start from (defaults to the working directory)
        max_levels: Number of parent directories to check

    Returns:
        Path to the first configuration file found, or None
    """
    directory = Path(start) if start is not None else Path.cwd()
    directory = directory.resolve()
    candidates = [directory, *list(directory.parents)[:max_levels]]
    for candidate in candidates:
        for name in CONFIG_FILE_NAMES:
            path = candidate / name
            if path.is_file():
                return path
    return None
