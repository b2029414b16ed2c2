"""Unit tests for the errors module."""

from envied.models.common import ErrorInfo
from envied.utils.errors import (
    EnviedError,
    EnvFileNotFoundError,
    GenerationError,
    InconsistentEnvironmentsError,
    MalformedConfigError,
    MissingVariableError,
)


class TestEnviedError:
    """Tests for base EnviedError."""

    def test_basic_error(self):
        """Test basic error creation."""
        error = EnviedError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.code == "UNKNOWN_ERROR"
        assert error.details == {}

    def test_to_error_info(self):
        """Test conversion to ErrorInfo model."""
        error = EnviedError("Test error", code="TEST_ERROR", details={"key": "value"})
        info = error.to_error_info()

        assert isinstance(info, ErrorInfo)
        assert info.code == "TEST_ERROR"
        assert info.details == {"key": "value"}
        assert str(info) == "[TEST_ERROR] Test error"


class TestSubclasses:
    """Tests for specific error types."""

    def test_env_file_not_found(self):
        error = EnvFileNotFoundError("/tmp/dev.env", reason="No such file or directory")
        assert isinstance(error, EnviedError)
        assert error.code == "ENV_FILE_NOT_FOUND"
        assert "/tmp/dev.env" in str(error)
        assert "No such file" in str(error)
        assert error.path == "/tmp/dev.env"

    def test_inconsistent_environments(self):
        error = InconsistentEnvironmentsError("API_KEY", "prod")
        assert error.code == "INCONSISTENT_ENVIRONMENTS"
        assert error.details == {"variable": "API_KEY", "environment": "prod"}
        assert str(error) == "Variable 'API_KEY' is missing in environment 'prod'"

    def test_malformed_config(self):
        error = MalformedConfigError("bad", path="envied.json")
        assert error.code == "MALFORMED_CONFIG"
        assert error.details == {"path": "envied.json"}
        assert MalformedConfigError("bad").details == {}

    def test_missing_variable(self):
        assert "not found" in str(MissingVariableError("TOKEN"))
        assert "empty" in str(MissingVariableError("TOKEN", empty=True))

    def test_generation_error(self):
        error = GenerationError("cannot write", path="/out/x.py")
        assert error.code == "GENERATION_ERROR"
        assert error.details["path"] == "/out/x.py"
