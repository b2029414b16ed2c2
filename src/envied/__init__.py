"""envied: typed, obfuscated configuration modules from environment files.

envied reads ``KEY=VALUE`` definition files for several named environments,
infers a type for each variable, checks that every environment defines the
same variables, and generates one Python module containing:

- **ConfigInterface**: a protocol with one ``Get<NAME>()`` accessor per variable
- **One dataclass per environment** with a ``load()`` constructor
- **Obfuscated constants** for String and Float values

Usage:
    # Library API
    from envied import Generator, load_config

    config = load_config("envied.json")
    result = Generator(config).generate()

    # Generated module
    from config.config_env_gen import new_config

    cfg = new_config("dev")
    print(cfg.GetPORT())

CLI:
    envied generate --config envied.json
    envied check --config envied.json
    envied inspect .env.dev
"""

__version__ = "0.1.0"

# Core
from envied.core.classifier import classify
from envied.core.consistency import check_consistency
from envied.core.generator import Generator, generate_from_config_file
from envied.core.loader import load_env_file, read_env_file
from envied.core.obfuscation import (
    deobfuscate_string,
    mask_with_key,
    obfuscate_string,
    unmask_with_key,
)

# Models
from envied.models.field import EnvironmentDefinition, Field, FieldType
from envied.models.generation import EmissionFormat, GenerationResult, ObfuscatedPayload

# Configuration and errors
from envied.utils.config import EnviedConfig, EnvironmentConfig, load_config
from envied.utils.errors import (
    EnviedError,
    EnvFileNotFoundError,
    InconsistentEnvironmentsError,
    MalformedConfigError,
    MissingVariableError,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "classify",
    "check_consistency",
    "Generator",
    "generate_from_config_file",
    "load_env_file",
    "read_env_file",
    "deobfuscate_string",
    "mask_with_key",
    "obfuscate_string",
    "unmask_with_key",
    # Models
    "EnvironmentDefinition",
    "Field",
    "FieldType",
    "EmissionFormat",
    "GenerationResult",
    "ObfuscatedPayload",
    # Config
    "EnviedConfig",
    "EnvironmentConfig",
    "load_config",
    # Errors
    "EnviedError",
    "EnvFileNotFoundError",
    "InconsistentEnvironmentsError",
    "MalformedConfigError",
    "MissingVariableError",
]
