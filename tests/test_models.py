"""Tests for value types and error classes."""

import pytest
from pydantic import ValidationError

from svcdaemon.errors import (
    AlreadyInstalledError,
    CommandError,
    DaemonError,
    DefinitionIOError,
    ErrorCode,
    NotInstalledError,
    PermissionDeniedError,
)
from svcdaemon.models import ActionResult, BackendKind, PathResult, ServiceDescriptor, StatusResult


class TestServiceDescriptor:
    """Test ServiceDescriptor validation."""

    def test_minimal(self):
        d = ServiceDescriptor(name="foo")
        assert d.port == ""
        assert d.version == ""
        assert d.description == "foo"
        assert d.dependencies == ()

    def test_integer_port_is_stringified(self):
        assert ServiceDescriptor(name="foo", port=8080).port == "8080"

    def test_dependencies_keep_order(self):
        d = ServiceDescriptor(name="foo", dependencies=["b.target", "a.target"])
        assert d.dependencies == ("b.target", "a.target")

    @pytest.mark.parametrize("name", ["", "  ", "a/b", "my app", "tab\tname", ".", "..", "foo\x00"])
    def test_rejects_unsafe_names(self, name):
        with pytest.raises(ValidationError):
            ServiceDescriptor(name=name)

    @pytest.mark.parametrize("field", ["description", "version", "port"])
    @pytest.mark.parametrize(
        "value",
        ["Foo\nExecStartPre=/bin/touch /tmp/x", "Foo\rBar", "Foo\x1b[0m", "say \"hi\"", "$(id)", "`id`", "a\\b"],
    )
    def test_rejects_values_unsafe_in_definitions(self, field, value):
        with pytest.raises(ValidationError):
            ServiceDescriptor(name="foo", **{field: value})

    def test_plain_punctuation_allowed(self):
        d = ServiceDescriptor(name="foo-bar_1.0", description="Foo (HTTP) service, v1", version="1.0-rc.1")
        assert d.description == "Foo (HTTP) service, v1"

    @pytest.mark.parametrize("dependency", ["", "network.target\nAfter=x", "two words"])
    def test_rejects_bad_dependencies(self, dependency):
        with pytest.raises(ValidationError):
            ServiceDescriptor(name="foo", dependencies=["syslog.target", dependency])

    def test_is_frozen(self):
        d = ServiceDescriptor(name="foo")
        with pytest.raises(ValidationError):
            d.name = "bar"


class TestResults:
    """Test the NamedTuple result types."""

    def test_action_result_unpacks(self):
        message, error = ActionResult("Starting foo:\t\t\t\t\t[  OK  ]")
        assert error is None
        assert message.endswith("[  OK  ]")

    def test_ok_property(self):
        assert ActionResult("m").ok
        assert not ActionResult("m", NotInstalledError()).ok
        assert StatusResult("m").ok
        assert not PathResult("", CommandError(["x"])).ok

    def test_status_defaults(self):
        result = StatusResult("Service foo is stopped")
        assert result.running is False
        assert result.pid is None


class TestErrors:
    """Test DaemonError subclasses."""

    def test_default_messages_and_codes(self):
        error = AlreadyInstalledError()
        assert isinstance(error, DaemonError)
        assert error.code == ErrorCode.ALREADY_INSTALLED
        assert error.message == "Service has already been installed"

    def test_custom_message(self):
        assert str(NotInstalledError("gone")) == "gone"

    def test_permission_denied_mentions_root(self):
        assert "root user privileges" in PermissionDeniedError().message

    def test_command_error_message(self):
        error = CommandError(["systemctl", "enable", "foo.service"], returncode=1, output="denied")
        assert str(error) == "systemctl enable foo.service failed (exit code 1): denied"
        assert error.cmd == ["systemctl", "enable", "foo.service"]
        assert error.code == ErrorCode.COMMAND_FAILED

    def test_definition_io_error(self):
        cause = PermissionError(13, "Permission denied")
        error = DefinitionIOError("/etc/init.d/foo", cause)
        assert str(error) == "/etc/init.d/foo: Permission denied"
        assert error.cause is cause
        assert error.code == ErrorCode.IO_ERROR


def test_backend_kind_values():
    assert [str(k) for k in BackendKind] == ["systemd", "sysv", "launchd"]
