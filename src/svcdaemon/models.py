"""Value types shared by the facade and the service backends.

ServiceDescriptor is a frozen Pydantic v2 model; result types are NamedTuples
so callers can unpack ``message, error = manager.start()``.
"""

from enum import StrEnum
from pathlib import PurePosixPath
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from svcdaemon.errors import DaemonError


_SHELL_SPECIAL = frozenset('"$`\\')


def _has_control_chars(value: str) -> bool:
    return any(ord(ch) < 32 or ord(ch) == 127 for ch in value)


class BackendKind(StrEnum):
    """Native service managers svcdaemon knows how to drive."""

    SYSTEMD = "systemd"
    SYSV = "sysv"
    LAUNCHD = "launchd"


class ServiceDescriptor(BaseModel):
    """Immutable description of the service being managed."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Service name; derives all OS paths and unit names")
    port: str = Field(default="", description="Listening port, informational only")
    version: str = Field(default="", description="Service version string")
    description: str = Field(default="", description="Human-readable description")
    dependencies: tuple[str, ...] = Field(
        default=(), description="Ordered names of services this one depends on"
    )

    @field_validator("name")
    @classmethod
    def name_must_be_path_safe(cls, v: str) -> str:
        """Reject names that cannot be used as a file name or unit name."""
        if not v or not v.strip():
            raise ValueError("name must be a non-empty string")
        if "/" in v or any(ch.isspace() for ch in v):
            raise ValueError("name must not contain '/' or whitespace")
        if v in (".", "..") or PurePosixPath(v).name != v:
            raise ValueError("name must be a plain file name, not '.' or '..'")
        return v

    @field_validator("port", mode="before")
    @classmethod
    def port_to_str(cls, v: object) -> object:
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator("name", "port", "version", "description")
    @classmethod
    def must_be_single_line_shell_safe(cls, v: str) -> str:
        """These values are embedded in definition files and the init script."""
        if _has_control_chars(v):
            raise ValueError("must not contain control characters or line breaks")
        if any(ch in _SHELL_SPECIAL for ch in v):
            raise ValueError("must not contain '\"', '$', '`' or '\\'")
        return v

    @field_validator("dependencies")
    @classmethod
    def dependencies_single_line(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        for dep in v:
            if not dep or _has_control_chars(dep) or any(ch.isspace() for ch in dep):
                raise ValueError(f"invalid dependency name {dep!r}")
        return v

    @model_validator(mode="before")
    @classmethod
    def default_description(cls, data: object) -> object:
        if isinstance(data, dict) and not data.get("description"):
            data = {**data, "description": data.get("name", "")}
        return data


class RunState(NamedTuple):
    """Running state derived from a native status command. Never cached."""

    running: bool
    pid: int | None
    message: str


class ActionResult(NamedTuple):
    """Outcome of a lifecycle action: always a message, maybe an error."""

    message: str
    error: DaemonError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class StatusResult(NamedTuple):
    """Outcome of a status query."""

    message: str
    error: DaemonError | None = None
    running: bool = False
    pid: int | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class PathResult(NamedTuple):
    """Executable path recorded by the native service manager."""

    path: str
    error: DaemonError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
