"""Loading of KEY=VALUE environment definition files."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

from envied.core.classifier import classify
from envied.models.field import EnvironmentDefinition, Field, FieldType
from envied.utils.errors import EnvFileNotFoundError
from envied.utils.logging import get_logger

logger = get_logger(__name__)


def parse_env_text(text: str) -> dict[str, str]:
    """
    Parse the contents of a definitions file.

    Blank lines and lines starting with ``#`` are skipped. Each remaining
    line is split at its first ``=``; key and value are kept verbatim, so
    quotes and trailing ``#`` text remain part of the value. Lines without
    ``=`` are ignored and later duplicates overwrite earlier ones.

    Args:
        text: File contents

    Returns:
        Mapping of variable name to raw value, in first-seen order
    """
    env: dict[str, str] = {}
    for line in text.split("\n"):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        env[key] = value
    return env


def read_env_file(path: Path | str) -> dict[str, str]:
    """Read a definitions file into a name → raw value mapping.

    Raises:
        EnvFileNotFoundError: If the file cannot be opened or read
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise EnvFileNotFoundError(path, reason=e.strerror) from e
    env = parse_env_text(data.decode("utf-8", errors="replace"))
    logger.debug("Read %d variables from %s", len(env), path)
    return env


def fields_from_vars(env_vars: Mapping[str, str]) -> list[Field]:
    """Build typed fields from raw values; empty values are always STRING."""
    fields = []
    for name, value in env_vars.items():
        field_type = classify(value) if value != "" else FieldType.STRING
        fields.append(Field(name=name, type=field_type, value=value))
    return fields


def load_env_file(path: Path | str) -> list[Field]:
    """Load a definitions file into typed fields."""
    return fields_from_vars(read_env_file(path))


def load_environment(name: str, path: Path | str, struct_name: str) -> EnvironmentDefinition:
    """Load one named environment.

    Args:
        name: Environment name
        path: Definitions file
        struct_name: Name of the class generated for this environment

    Returns:
        EnvironmentDefinition with fields in file order
    """
    return EnvironmentDefinition(name=name, struct_name=struct_name, fields=load_env_file(path))
