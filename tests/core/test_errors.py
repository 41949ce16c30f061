"""Tests for error types and codes."""

import pytest

from semver_audit.analyzer.errors import (
    AuditError,
    DependencyNotFoundError,
    DependencyResolutionError,
    MalformedUpgradeSpecError,
    SnapshotFormatError,
    SurfaceLoadError,
)
from semver_audit.core.errors import (
    ConfigError,
    ErrorCode,
    InternalError,
    SemverAuditError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.CONFIG_INVALID_VALUE, 2000),
            (ErrorCode.AUDIT_MALFORMED_UPGRADE_SPEC, 3000),
            (ErrorCode.AUDIT_SURFACE_LOAD_FAILED, 3000),
            (ErrorCode.INTERNAL_ERROR, 9000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        # Given
        error_code = code

        # When
        value = error_code.value

        # Then
        assert expected_range <= value < expected_range + 1000


class TestSemverAuditError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all required fields."""
        # Given
        error = SemverAuditError(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message="Test message",
            details={"key": "value"},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 2001,
            "error": "CONFIG_PARSE_ERROR",
            "message": "Test message",
            "details": {"key": "value"},
        }

    def test_given_error_when_str_then_human_readable(self) -> None:
        """Error string representation is human readable."""
        # Given
        error = SemverAuditError(
            code=ErrorCode.INTERNAL_ERROR,
            message="Something broke",
        )

        # When
        result = str(error)

        # Then
        assert result == "[9001] INTERNAL_ERROR: Something broke"


class TestConfigError:
    """ConfigError factory method tests."""

    @pytest.mark.parametrize(
        ("factory", "kwargs", "expected_code"),
        [
            (
                "parse_error",
                {"path": "/foo", "reason": "bad yaml"},
                ErrorCode.CONFIG_PARSE_ERROR,
            ),
            (
                "invalid_value",
                {"field": "audit.max_reported_locations", "value": -1, "reason": "negative"},
                ErrorCode.CONFIG_INVALID_VALUE,
            ),
            ("file_not_found", {"path": "/missing"}, ErrorCode.CONFIG_FILE_NOT_FOUND),
        ],
    )
    def test_given_factory_when_called_then_correct_code(
        self, factory: str, kwargs: dict[str, object], expected_code: ErrorCode
    ) -> None:
        """Factory methods produce errors with correct error codes."""
        # Given
        factory_method = getattr(ConfigError, factory)

        # When
        error = factory_method(**kwargs)

        # Then
        assert error.code == expected_code
        assert isinstance(error, SemverAuditError)

    def test_given_parse_error_when_created_then_path_in_details(self) -> None:
        """Parse error includes file path in details."""
        # Given
        path = "/config.yaml"
        reason = "invalid syntax"

        # When
        error = ConfigError.parse_error(path, reason)

        # Then
        assert error.details["path"] == path
        assert error.details["reason"] == reason


class TestInternalError:
    """InternalError factory tests."""

    def test_given_details_when_unexpected_then_details_kept(self) -> None:
        """Extra keyword details are preserved."""
        # When
        error = InternalError.unexpected("scan failed", module="example.com/lib")

        # Then
        assert error.code == ErrorCode.INTERNAL_ERROR
        assert error.details == {"module": "example.com/lib"}
        assert "scan failed" in error.message


class TestAuditErrors:
    """Audit error hierarchy tests."""

    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (MalformedUpgradeSpecError("bad"), ErrorCode.AUDIT_MALFORMED_UPGRADE_SPEC),
            (DependencyNotFoundError("example.com/lib"), ErrorCode.AUDIT_DEPENDENCY_NOT_FOUND),
            (SurfaceLoadError("example.com/lib", "v1.0.0"), ErrorCode.AUDIT_SURFACE_LOAD_FAILED),
            (DependencyResolutionError("x"), ErrorCode.AUDIT_DEPENDENCY_RESOLUTION_FAILED),
            (SnapshotFormatError("/p.json", "x"), ErrorCode.AUDIT_SNAPSHOT_FORMAT),
        ],
    )
    def test_given_audit_error_when_to_dict_then_code_mapped(
        self, error: AuditError, code: ErrorCode
    ) -> None:
        """Every audit error maps onto a typed code."""
        # When
        data = error.to_dict()

        # Then
        assert isinstance(error, AuditError)
        assert data["code"] == code.value
        assert data["error"] == code.name
        assert data["message"] == str(error)

    def test_given_surface_load_error_when_str_then_names_module_version(self) -> None:
        """SurfaceLoadError carries module@version and reason."""
        # Given
        error = SurfaceLoadError("example.com/lib", "v2.0.0", "no such version")

        # When
        message = str(error)

        # Then
        assert message == "failed to load surface of example.com/lib@v2.0.0: no such version"
        assert error.details() == {
            "module": "example.com/lib",
            "version": "v2.0.0",
            "reason": "no such version",
        }

    def test_given_dependency_not_found_when_str_then_names_module(self) -> None:
        """DependencyNotFoundError names the missing module."""
        error = DependencyNotFoundError("example.com/lib")

        assert str(error) == "module example.com/lib not found in project dependencies"
