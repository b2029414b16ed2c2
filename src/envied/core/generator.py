"""Generation pipeline: load, check, obfuscate, render, write."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Sequence

from envied.core.consistency import check_definitions, find_type_conflicts
from envied.core.loader import load_environment
from envied.core.obfuscation import obfuscate_field
from envied.models.field import EnvironmentDefinition, Field
from envied.models.generation import EmissionFormat, GenerationResult, ObfuscatedEnvironment
from envied.renderers.base import RenderContext, Renderer
from envied.renderers.python import PythonModuleRenderer, python_identifier
from envied.utils.config import EnviedConfig, load_config
from envied.utils.errors import MissingVariableError
from envied.utils.files import write_atomic
from envied.utils.logging import get_logger, get_logger_with_context

logger = get_logger(__name__)


def resolve_env_vars(fields: Sequence[Field], environ: Mapping[str, str]) -> list[Field]:
    """
    Fill declared fields from a process environment.

    A set, non-empty variable wins; a set but empty variable is an error;
    an unset variable falls back to its default, then to an empty value
    when optional.

    Args:
        fields: Declared fields (name, type, default, optional)
        environ: Environment to read, usually ``os.environ``

    Returns:
        Fields with ``value`` populated

    Raises:
        MissingVariableError: For empty or missing required variables
    """
    resolved = []
    for field in fields:
        if field.name in environ:
            value = environ[field.name]
            if value == "":
                raise MissingVariableError(field.name, empty=True)
        elif field.default_value is not None:
            value = field.default_value
        elif field.optional:
            value = ""
        else:
            raise MissingVariableError(field.name)
        resolved.append(field.model_copy(update={"value": value}))
    return resolved


class Generator:
    """Generates a configuration module from environment definition files.

    Example:
        config = load_config("envied.json")
        result = Generator(config).generate()
        print(result.output_paths)
    """

    def __init__(self, config: EnviedConfig, renderer: Renderer | None = None) -> None:
        self.config = config
        self.renderer = renderer or PythonModuleRenderer()

    def load_environments(self) -> list[EnvironmentDefinition]:
        """Load every configured environment in declaration order.

        Raises:
            EnvFileNotFoundError: If any definitions file cannot be read
        """
        definitions = []
        for name, env in self.config.environments.items():
            log = get_logger_with_context(__name__, environment=name)
            log.debug("Loading %s", env.env_file)
            definition = load_environment(name, env.env_file, env.struct_name)
            log.info("Loaded %d variables", len(definition.fields))
            definitions.append(definition)
        return definitions

    def build(self) -> GenerationResult:
        """Load, check and render all environments without writing.

        Raises:
            EnvFileNotFoundError: If a definitions file is missing
            InconsistentEnvironmentsError: If environments define different variables
        """
        definitions = self.load_environments()
        check_definitions(definitions)
        return self.build_from_definitions(definitions, self.config.output_path)

    def build_from_definitions(
        self,
        definitions: Sequence[EnvironmentDefinition],
        output_path: Path,
        format: EmissionFormat | None = None,
    ) -> GenerationResult:
        """Obfuscate and render already loaded environments.

        Args:
            definitions: Environments in emission order
            output_path: Destination of the generated module
            format: Obfuscation layout, defaults to the configured one

        Returns:
            GenerationResult holding the rendered module
        """
        format = format or self.config.format
        for name, types in find_type_conflicts(definitions).items():
            summary = ", ".join(f"{env}={t.value}" for env, t in types.items())
            logger.warning("Variable %s has different types across environments: %s", name, summary)

        environments = [self._obfuscate(d, format) for d in definitions]
        names = [d.name for d in definitions]
        reference = self.config.reference_environment
        context = RenderContext(
            package_name=self.config.package_name,
            format=format,
            reference_environment=reference if reference in names else None,
        )
        content = self.renderer.render(environments, context)
        return GenerationResult(
            content=content,
            output_paths=[output_path],
            environments=names,
            format=format,
        )

    def _obfuscate(self, definition: EnvironmentDefinition, format: EmissionFormat) -> ObfuscatedEnvironment:
        payloads = {}
        for field in definition.fields:
            payload = obfuscate_field(field, definition.name, self.config.random_seed, format)
            if payload is not None:
                payloads[field.name] = payload
        logger.debug(
            "Obfuscated %d of %d fields in %s", len(payloads), len(definition.fields), definition.name
        )
        return ObfuscatedEnvironment(definition=definition, payloads=payloads)

    def write_result(self, result: GenerationResult) -> list[Path]:
        """Atomically write a result to each of its output paths.

        Raises:
            GenerationError: If a file cannot be written
        """
        written = [write_atomic(path, result.content) for path in result.output_paths]
        for path in written:
            logger.info("Wrote %s", path)
        return written

    def generate(self) -> GenerationResult:
        """Build the merged module for all environments and write it."""
        result = self.build()
        self.write_result(result)
        return result

    def single_output_path(self, environment: str) -> Path:
        """Output path of a single-environment module."""
        return self.config.output_dir / f"config_{python_identifier(environment).lower()}.py"

    def generate_from_env_file(
        self,
        env_file: Path | str,
        environment: str,
        struct_name: str,
    ) -> GenerationResult:
        """Generate a packed single-environment module from one definitions file.

        Raises:
            EnvFileNotFoundError: If the file cannot be read
        """
        definition = load_environment(environment, env_file, struct_name)
        result = self.build_from_definitions(
            [definition], self.single_output_path(environment), format=EmissionFormat.PACKED
        )
        self.write_result(result)
        return result

    def generate_from_env_vars(
        self,
        fields: Sequence[Field],
        environment: str,
        struct_name: str,
        environ: Mapping[str, str] | None = None,
    ) -> GenerationResult:
        """Generate a packed single-environment module from process variables.

        Field types are taken from the declarations rather than inferred.

        Raises:
            MissingVariableError: If a required variable is unset or empty
        """
        resolved = resolve_env_vars(fields, os.environ if environ is None else environ)
        definition = EnvironmentDefinition(name=environment, struct_name=struct_name, fields=resolved)
        result = self.build_from_definitions(
            [definition], self.single_output_path(environment), format=EmissionFormat.PACKED
        )
        self.write_result(result)
        return result


def generate_from_config_file(config_path: Path | str) -> GenerationResult:
    """Load a run configuration file and generate its module.

    Raises:
        MalformedConfigError: If the configuration cannot be parsed
        EnvFileNotFoundError: If a definitions file is missing
        InconsistentEnvironmentsError: If environments define different variables
    """
    config = load_config(config_path)
    logger.info("Generating configuration from %s", config_path)
    return Generator(config).generate()
