"""Source renderers."""

from envied.renderers.base import BaseRenderer, RenderContext, Renderer
from envied.renderers.python import PythonModuleRenderer, accessor_name, python_identifier

__all__ = [
    "BaseRenderer",
    "RenderContext",
    "Renderer",
    "PythonModuleRenderer",
    "accessor_name",
    "python_identifier",
]
