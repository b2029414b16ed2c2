"""Renderer producing a Python configuration module."""

from __future__ import annotations

import json
import keyword
from typing import Sequence

from envied.models.field import EnvironmentDefinition, Field, FieldType
from envied.models.generation import EmissionFormat, ObfuscatedEnvironment, ObfuscatedPayload
from envied.renderers.base import BaseRenderer, RenderContext
from envied.renderers.source import (
    AnnAssign,
    Assign,
    Call,
    ClassDef,
    FunctionDef,
    Import,
    Module,
    Node,
    Statement,
)
from envied.utils.errors import GenerationError

HEADER = (
    "Code generated by envied. DO NOT EDIT.",
    "Generated merged configuration module for all environments",
)
INTERFACE_NAME = "ConfigInterface"
RUNTIME_ALIAS = "_envied"
CONSTRUCTOR = "load"
MAX_LINE = 88

_RESERVED = frozenset({CONSTRUCTOR})
_MODULE_NAMES = frozenset(
    {INTERFACE_NAME, RUNTIME_ALIAS, "ENVIRONMENTS", "new_config", "dataclass", "Protocol", "runtime_checkable"}
)


def _identifier_char(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalnum())


def python_identifier(name: str) -> str:
    """Turn a variable name into a usable attribute name."""
    ident = "".join(ch if _identifier_char(ch) else "_" for ch in name) or "_"
    if ident[0].isdigit():
        ident = f"_{ident}"
    if keyword.iskeyword(ident) or ident in _RESERVED:
        ident = f"{ident}_"
    return ident


def accessor_name(name: str) -> str:
    """Accessor method name for a field, ``Get<FieldName>``."""
    return f"Get{python_identifier(name)}"


def string_literal(value: str) -> str:
    """Double-quoted Python string literal for ``value``."""
    return json.dumps(value, ensure_ascii=False)


def int_tuple(name: str, values: Sequence[int]) -> str:
    """Tuple literal, wrapped over several lines when it gets long."""
    items = [str(v) for v in values]
    inline = f"({', '.join(items)},)" if len(items) == 1 else f"({', '.join(items)})"
    if len(name) + 3 + len(inline) <= MAX_LINE:
        return inline

    rows: list[str] = []
    row = ""
    for item in items:
        candidate = f"{row} {item}," if row else f"{item},"
        if len(candidate) + 4 > MAX_LINE and row:
            rows.append(row)
            row = f"{item},"
        else:
            row = candidate
    rows.append(row)
    return "(\n" + "\n".join(f"    {r}" for r in rows) + "\n)"


class PythonModuleRenderer(BaseRenderer):
    """Render environments as one Python module.

    The module contains, in order: a ``ConfigInterface`` protocol with one
    ``Get<FieldName>`` accessor per reference field, the obfuscation
    constants of every environment, one frozen dataclass per environment
    with a ``load()`` constructor and accessors, and an ``ENVIRONMENTS``
    registry with a ``new_config()`` factory.

    Example:
        renderer = PythonModuleRenderer()
        source = renderer.render(environments, RenderContext(package_name="config"))
    """

    def render(self, environments: Sequence[ObfuscatedEnvironment], context: RenderContext) -> str:
        """Render environments to Python source.

        Args:
            environments: Environments in emission order
            context: Rendering options

        Returns:
            Module source text

        Raises:
            GenerationError: If there is nothing to render or names collide
        """
        if not environments:
            raise GenerationError("No environments to render")

        self._check_struct_names(environments)
        self._check_constant_names(environments)
        reference = self._reference(environments, context)
        module = Module(
            header=HEADER,
            docstring=f"Environment configuration for the {context.package_name} package.",
        )
        module.add(
            Import("__future__", ["annotations"], group=0),
            Import("dataclasses", ["dataclass"], group=1),
            Import("typing", ["Protocol", "runtime_checkable"], group=1),
            Import(f"{context.runtime_module}.runtime", alias=RUNTIME_ALIAS, group=2),
        )
        module.add(self._interface(reference))
        for env in environments:
            module.add(*self._constants(env))
        for env in environments:
            module.add(self._config_class(env))
        module.add(*self._registry(environments))
        return module.render()

    def _check_struct_names(self, environments: Sequence[ObfuscatedEnvironment]) -> None:
        seen: set[str] = set()
        for env in environments:
            struct_name = env.definition.struct_name
            if not struct_name.isidentifier() or keyword.iskeyword(struct_name):
                raise GenerationError(f"Invalid class name '{struct_name}'")
            if struct_name in _MODULE_NAMES or struct_name in seen:
                raise GenerationError(
                    f"Class name '{struct_name}' of environment '{env.definition.name}' is already in use"
                )
            seen.add(struct_name)

    def _check_constant_names(self, environments: Sequence[ObfuscatedEnvironment]) -> None:
        owners: dict[str, str] = {}
        for env in environments:
            for payload in env.payloads.values():
                for const in (payload.key_name, payload.data_name):
                    if const in owners:
                        raise GenerationError(
                            f"Constant '{const}' is generated for both environment "
                            f"'{owners[const]}' and environment '{env.definition.name}'"
                        )
                    owners[const] = env.definition.name

    def _reference(
        self, environments: Sequence[ObfuscatedEnvironment], context: RenderContext
    ) -> EnvironmentDefinition:
        if context.reference_environment:
            for env in environments:
                if env.definition.name == context.reference_environment:
                    return env.definition
            raise GenerationError(
                f"Reference environment '{context.reference_environment}' was not loaded"
            )
        return environments[0].definition

    def _interface(self, reference: EnvironmentDefinition) -> ClassDef:
        methods = [
            FunctionDef(accessor_name(f.name), ["self"], f.type.value)
            for f in reference.fields
        ]
        return ClassDef(
            INTERFACE_NAME,
            bases=["Protocol"],
            decorators=["runtime_checkable"],
            docstring="Accessors implemented by every generated configuration.",
            body=methods,
        )

    def _constants(self, env: ObfuscatedEnvironment) -> list[Node]:
        nodes: list[Node] = []
        name = env.definition.name
        for field in env.definition.fields:
            payload = env.payloads.get(field.name)
            if payload is None:
                continue
            if payload.format == EmissionFormat.PACKED:
                key_expr = string_literal(payload.key)
                data_expr = string_literal(payload.masked)
            else:
                key_expr = int_tuple(payload.key_name, payload.keys)
                data_expr = int_tuple(payload.data_name, payload.cipher)
            nodes.append(
                Assign(payload.key_name, key_expr, comment=f"Key for {field.name} in {name} environment")
            )
            nodes.append(
                Assign(
                    payload.data_name,
                    data_expr,
                    comment=f"Obfuscated data for {field.name} in {name} environment",
                )
            )
        return nodes

    def _attributes(self, definition: EnvironmentDefinition) -> list[tuple[Field, str]]:
        accessors = {accessor_name(f.name): f.name for f in definition.fields}
        seen: dict[str, str] = {}
        out = []
        for field in definition.fields:
            attr = python_identifier(field.name)
            if attr in accessors:
                raise GenerationError(
                    f"Variable '{field.name}' in environment '{definition.name}' maps to "
                    f"attribute '{attr}', which is the accessor of '{accessors[attr]}'"
                )
            if attr in seen:
                raise GenerationError(
                    f"Variables '{seen[attr]}' and '{field.name}' in environment "
                    f"'{definition.name}' map to the same attribute '{attr}'"
                )
            seen[attr] = field.name
            out.append((field, attr))
        return out

    def _config_class(self, env: ObfuscatedEnvironment) -> ClassDef:
        definition = env.definition
        attributes = self._attributes(definition)

        body: list[Node] = [AnnAssign(attr, field.type.value) for field, attr in attributes]
        body.append(
            FunctionDef(
                CONSTRUCTOR,
                ["cls"],
                definition.struct_name,
                decorators=["classmethod"],
                docstring=f"Build the {definition.name} configuration from embedded values.",
                body=[
                    Call(
                        "return cls",
                        [
                            (attr, self._value_expr(field, env.payloads.get(field.name)))
                            for field, attr in attributes
                        ],
                    )
                ],
            )
        )
        for field, attr in attributes:
            body.append(
                FunctionDef(
                    accessor_name(field.name),
                    ["self"],
                    field.type.value,
                    body=[Statement(f"return self.{attr}")],
                )
            )
        return ClassDef(
            definition.struct_name,
            decorators=["dataclass(frozen=True)"],
            docstring=f"Configuration for the {definition.name} environment.",
            body=body,
        )

    def _value_expr(self, field: Field, payload: ObfuscatedPayload | None) -> str:
        if payload is None:
            text = string_literal(field.value)
        elif payload.format == EmissionFormat.PACKED:
            text = f"{RUNTIME_ALIAS}.unmask_with_key({payload.data_name}, {payload.key_name})"
        else:
            text = f"{RUNTIME_ALIAS}.deobfuscate_string({payload.key_name}, {payload.data_name})"

        if field.type == FieldType.STRING:
            return text
        if field.type == FieldType.FLOAT:
            return f"{RUNTIME_ALIAS}.parse_float({text})"
        if field.type == FieldType.INT:
            return f"{RUNTIME_ALIAS}.parse_int({text})"
        return f"{RUNTIME_ALIAS}.parse_bool({text})"

    def _registry(self, environments: Sequence[ObfuscatedEnvironment]) -> list[Node]:
        entries = "\n".join(
            f"    {string_literal(env.definition.name)}: {env.definition.struct_name},"
            for env in environments
        )
        return [
            Assign("ENVIRONMENTS", "{\n" + entries + "\n}"),
            FunctionDef(
                "new_config",
                ["environment: str"],
                INTERFACE_NAME,
                docstring="Load the configuration for an environment name; unknown names raise KeyError.",
                body=[Statement(f"return ENVIRONMENTS[environment].{CONSTRUCTOR}()")],
            ),
        ]
