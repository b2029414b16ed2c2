"""Error types for envied."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from envied.models.common import ErrorInfo


class EnviedError(Exception):
    """Base exception for envied."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_error_info(self) -> ErrorInfo:
        """Convert to ErrorInfo model."""
        return ErrorInfo(code=self.code, message=self.message, details=self.details)


class EnvFileNotFoundError(EnviedError):
    """An environment definition file could not be opened."""

    def __init__(self, path: str | Path, reason: str | None = None):
        message = f"Environment file not found: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(
            message,
            code="ENV_FILE_NOT_FOUND",
            details={"path": str(path)},
        )
        self.path = str(path)


class InconsistentEnvironmentsError(EnviedError):
    """A variable is defined in some environments but not in another."""

    def __init__(self, variable: str, environment: str):
        super().__init__(
            f"Variable '{variable}' is missing in environment '{environment}'",
            code="INCONSISTENT_ENVIRONMENTS",
            details={"variable": variable, "environment": environment},
        )
        self.variable = variable
        self.environment = environment


class MalformedConfigError(EnviedError):
    """The run configuration could not be parsed."""

    def __init__(self, message: str, path: str | Path | None = None):
        details = {"path": str(path)} if path else {}
        super().__init__(message, code="MALFORMED_CONFIG", details=details)


class MissingVariableError(EnviedError):
    """A required process environment variable is unset or empty."""

    def __init__(self, name: str, empty: bool = False):
        if empty:
            message = f"Environment variable '{name}' is empty"
        else:
            message = f"Required environment variable '{name}' not found"
        super().__init__(
            message,
            code="MISSING_VARIABLE",
            details={"name": name, "empty": empty},
        )
        self.name = name


class GenerationError(EnviedError):
    """Generated output could not be written."""

    def __init__(self, message: str, path: str | Path | None = None):
        details = {"path": str(path)} if path else {}
        super().__init__(message, code="GENERATION_ERROR", details=details)
