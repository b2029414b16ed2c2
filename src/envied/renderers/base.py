"""Base renderer protocol and types."""

from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

from pydantic import BaseModel, Field

from envied.models.generation import EmissionFormat, ObfuscatedEnvironment
from envied.utils.files import write_atomic


class RenderContext(BaseModel):
    """Options shared by all renderers for one generation run."""

    model_config = {"frozen": True}

    package_name: str = Field(default="config", description="Label of the generated package")
    format: EmissionFormat = Field(default=EmissionFormat.ARRAYS, description="Obfuscation layout")
    reference_environment: str | None = Field(
        default=None, description="Environment whose fields define the shared interface"
    )
    runtime_module: str = Field(default="envied", description="Package providing the runtime helpers")


@runtime_checkable
class Renderer(Protocol):
    """Protocol for source renderers.

    A renderer turns loaded, obfuscated environments into the text of one
    source file. It performs no I/O in :meth:`render`.
    """

    def render(self, environments: Sequence[ObfuscatedEnvironment], context: RenderContext) -> str:
        """Render environments to source text.

        Args:
            environments: Environments in emission order
            context: Rendering options

        Returns:
            Generated source
        """
        ...

    def render_to_file(
        self,
        environments: Sequence[ObfuscatedEnvironment],
        context: RenderContext,
        path: Path,
    ) -> Path:
        """Render and atomically write to ``path``."""
        ...


class BaseRenderer:
    """Base implementation providing :meth:`render_to_file`.

    Subclasses implement :meth:`render`.
    """

    def render_to_file(
        self,
        environments: Sequence[ObfuscatedEnvironment],
        context: RenderContext,
        path: Path,
    ) -> Path:
        """Render and atomically write to ``path``.

        Raises:
            GenerationError: If the file cannot be written
        """
        return write_atomic(path, self.render(environments, context))

    def render(self, environments: Sequence[ObfuscatedEnvironment], context: RenderContext) -> str:
        """Render environments to source text. Must be implemented by subclasses."""
        raise NotImplementedError
