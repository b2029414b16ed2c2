"""Shared test fixtures for envied tests."""

import importlib.util
import json
import sys
from pathlib import Path
from types import ModuleType

import pytest

DEV_ENV = """# Dev environment
TOKEN=dev_token_123
API_URL=https://dev-api.example.com
PORT=8080
DEBUG=true
TIMEOUT=30.5
EMPTY_VALUE=
"""

PROD_ENV = """# Prod environment
TOKEN=prod_token_456
API_URL=https://api.example.com
PORT=80
DEBUG=false
TIMEOUT=60.0
EMPTY_VALUE=
"""


@pytest.fixture
def dev_env_file(tmp_path: Path) -> Path:
    """Create a dev definitions file."""
    path = tmp_path / "dev.env"
    path.write_text(DEV_ENV)
    return path


@pytest.fixture
def prod_env_file(tmp_path: Path) -> Path:
    """Create a prod definitions file."""
    path = tmp_path / "prod.env"
    path.write_text(PROD_ENV)
    return path


@pytest.fixture
def config_data(tmp_path: Path, dev_env_file: Path, prod_env_file: Path) -> dict:
    """Run configuration covering dev and prod."""
    return {
        "package_name": "testconfig",
        "output_dir": str(tmp_path / "generated"),
        "random_seed": 12345,
        "environments": {
            "dev": {"env_file": str(dev_env_file), "struct_name": "DevConfig"},
            "prod": {"env_file": str(prod_env_file), "struct_name": "ProdConfig"},
        },
    }


@pytest.fixture
def config_file(tmp_path: Path, config_data: dict) -> Path:
    """Write the run configuration as JSON."""
    path = tmp_path / "envied.json"
    path.write_text(json.dumps(config_data, indent=2))
    return path


@pytest.fixture
def import_generated():
    """Import a generated module from a file path."""
    loaded: list[str] = []

    def _import(path: Path) -> ModuleType:
        name = f"envied_generated_{len(loaded)}_{path.stem}"
        spec = importlib.util.spec_from_file_location(name, path)
        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        spec.loader.exec_module(module)
        loaded.append(name)
        return module

    yield _import

    for name in loaded:
        sys.modules.pop(name, None)
