"""Data models for envied."""

from envied.models.common import ErrorInfo
from envied.models.field import EnvironmentDefinition, Field, FieldType
from envied.models.generation import (
    EmissionFormat,
    GenerationResult,
    ObfuscatedEnvironment,
    ObfuscatedPayload,
)

__all__ = [
    "ErrorInfo",
    "EnvironmentDefinition",
    "Field",
    "FieldType",
    "EmissionFormat",
    "GenerationResult",
    "ObfuscatedEnvironment",
    "ObfuscatedPayload",
]
