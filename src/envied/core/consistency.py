"""Cross-environment consistency checks."""

from __future__ import annotations

from typing import Iterable, Mapping

from envied.models.field import EnvironmentDefinition, FieldType
from envied.utils.errors import InconsistentEnvironmentsError
from envied.utils.logging import get_logger

logger = get_logger(__name__)


def check_consistency(environments: Mapping[str, Iterable[str]]) -> None:
    """
    Verify that every environment defines the same variable names.

    Environments are visited in mapping order and the union of names in
    sorted order, so the reported pair is stable for the same input.

    Args:
        environments: Environment name → variable names

    Raises:
        InconsistentEnvironmentsError: For the first missing (variable, environment) pair
    """
    if len(environments) < 2:
        return

    names = {env: set(vars_) for env, vars_ in environments.items()}
    union: set[str] = set().union(*names.values())

    for env, present in names.items():
        for var in sorted(union):
            if var not in present:
                raise InconsistentEnvironmentsError(var, env)

    logger.info("Consistency check passed: %d environments share %d variables", len(names), len(union))


def check_definitions(definitions: Iterable[EnvironmentDefinition]) -> None:
    """Run :func:`check_consistency` over loaded environments."""
    check_consistency({d.name: d.field_names() for d in definitions})


def find_type_conflicts(
    definitions: Iterable[EnvironmentDefinition],
) -> dict[str, dict[str, FieldType]]:
    """Find variables whose inferred type differs between environments.

    Returns:
        Variable name → {environment: type} for every conflicting variable
    """
    seen: dict[str, dict[str, FieldType]] = {}
    for definition in definitions:
        for field in definition.fields:
            seen.setdefault(field.name, {})[definition.name] = field.type
    return {
        name: types
        for name, types in sorted(seen.items())
        if len(set(types.values())) > 1
    }
