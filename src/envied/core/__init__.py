"""Core generation pipeline for envied.

This module provides the main library API: classification, loading,
consistency checks, obfuscation and the :class:`Generator` that ties
them together.
"""

from envied.core.classifier import classify
from envied.core.consistency import check_consistency, check_definitions, find_type_conflicts
from envied.core.generator import Generator, generate_from_config_file, resolve_env_vars
from envied.core.loader import (
    fields_from_vars,
    load_env_file,
    load_environment,
    parse_env_text,
    read_env_file,
)
from envied.core.obfuscation import (
    deobfuscate_string,
    mask_with_key,
    obfuscate_field,
    obfuscate_string,
    unmask_with_key,
)

__all__ = [
    "classify",
    "check_consistency",
    "check_definitions",
    "find_type_conflicts",
    "Generator",
    "generate_from_config_file",
    "resolve_env_vars",
    "fields_from_vars",
    "load_env_file",
    "load_environment",
    "parse_env_text",
    "read_env_file",
    "deobfuscate_string",
    "mask_with_key",
    "obfuscate_field",
    "obfuscate_string",
    "unmask_with_key",
]
