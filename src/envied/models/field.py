"""Configuration field and environment data models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field as PydanticField


class FieldType(str, Enum):
    """Inferred type of a configuration field.

    The value is the Python annotation used in generated code.
    """

    STRING = "str"
    INT = "int"
    BOOL = "bool"
    FLOAT = "float"

    @property
    def obfuscated(self) -> bool:
        """Whether values of this type are obfuscated in generated code."""
        return self in (FieldType.STRING, FieldType.FLOAT)


class Field(BaseModel):
    """One configuration variable."""

    model_config = {"frozen": True}

    name: str = PydanticField(description="Variable name, taken from the file key")
    type: FieldType = PydanticField(
        default=FieldType.STRING, description="Inferred or declared type"
    )
    value: str = PydanticField(default="", description="Raw value text")
    default_value: str | None = PydanticField(
        default=None, description="Fallback when the variable is not set"
    )
    optional: bool = PydanticField(
        default=False, description="Whether the variable may be absent"
    )


class EnvironmentDefinition(BaseModel):
    """A named environment with its ordered set of fields."""

    model_config = {"frozen": True}

    name: str = PydanticField(description="Environment name (dev, prod, ...)")
    struct_name: str = PydanticField(description="Name of the generated class")
    fields: list[Field] = PydanticField(
        default_factory=list, description="Fields in definition order"
    )

    def field_names(self) -> list[str]:
        """Return field names in definition order."""
        return [f.name for f in self.fields]

    def get(self, name: str) -> Field | None:
        """Look up a field by name."""
        for f in self.fields:
            if f.name == name:
                return f
        return None
