"""Obfuscation and generation result models."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from envied.models.field import EnvironmentDefinition


class EmissionFormat(str, Enum):
    """How obfuscated values are laid out in generated code."""

    ARRAYS = "arrays"
    PACKED = "packed"


class ObfuscatedPayload(BaseModel):
    """Obfuscated data for a single String or Float field.

    ``keys``/``cipher`` hold one integer per code point for the array
    format; ``key``/``masked`` hold the repeating key and base64 text for
    the packed format.
    """

    model_config = {"frozen": True}

    field_name: str = Field(description="Name of the obfuscated field")
    key_name: str = Field(description="Constant name holding the key material")
    data_name: str = Field(description="Constant name holding the obfuscated data")
    format: EmissionFormat = Field(default=EmissionFormat.ARRAYS)
    keys: list[int] = Field(default_factory=list, description="Per code point keys")
    cipher: list[int] = Field(default_factory=list, description="Per code point cipher")
    key: str = Field(default="", description="Repeating mask key")
    masked: str = Field(default="", description="Base64 masked value")

    @model_validator(mode="after")
    def _check_lengths(self) -> "ObfuscatedPayload":
        if len(self.keys) != len(self.cipher):
            raise ValueError("keys and cipher must have the same length")
        return self


class GenerationResult(BaseModel):
    """A rendered source artifact and the paths it is written to."""

    model_config = {"frozen": True}

    content: str = Field(description="Generated source text")
    output_paths: list[Path] = Field(description="Destination files")
    environments: list[str] = Field(
        default_factory=list, description="Environments rendered, in order"
    )
    format: EmissionFormat = Field(default=EmissionFormat.ARRAYS)


class ObfuscatedEnvironment(BaseModel):
    """A loaded environment together with its obfuscated payloads."""

    model_config = {"frozen": True}

    definition: EnvironmentDefinition = Field(description="Loaded environment")
    payloads: dict[str, ObfuscatedPayload] = Field(
        default_factory=dict, description="Payloads keyed by field name"
    )
