"""Error types returned by service backends.

Backends do not raise these to their callers. Every lifecycle method returns
the error inside its result object next to a human-readable message, so the
hosting CLI can print the message and decide on an exit code from the error.
"""

from enum import StrEnum


class ErrorCode(StrEnum):
    """Error codes for svcdaemon operations."""

    PERMISSION_DENIED = "PERMISSION_DENIED"
    ALREADY_INSTALLED = "ALREADY_INSTALLED"
    NOT_INSTALLED = "NOT_INSTALLED"
    ALREADY_RUNNING = "ALREADY_RUNNING"
    ALREADY_STOPPED = "ALREADY_STOPPED"
    COMMAND_FAILED = "COMMAND_FAILED"
    IO_ERROR = "IO_ERROR"
    TEMPLATE_ERROR = "TEMPLATE_ERROR"
    UNSUPPORTED_PLATFORM = "UNSUPPORTED_PLATFORM"


class DaemonError(Exception):
    """Base class for all service-control errors."""

    code: ErrorCode = ErrorCode.COMMAND_FAILED
    default_message = "service operation failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class PermissionDeniedError(DaemonError):
    """Raised when the process lacks rights to manage system services."""

    code = ErrorCode.PERMISSION_DENIED
    default_message = (
        "You must have root user privileges. "
        "Possibly using 'sudo' command should help"
    )


class AlreadyInstalledError(DaemonError):
    code = ErrorCode.ALREADY_INSTALLED
    default_message = "Service has already been installed"


class NotInstalledError(DaemonError):
    code = ErrorCode.NOT_INSTALLED
    default_message = "Service is not installed"


class AlreadyRunningError(DaemonError):
    code = ErrorCode.ALREADY_RUNNING
    default_message = "Service is already running"


class AlreadyStoppedError(DaemonError):
    code = ErrorCode.ALREADY_STOPPED
    default_message = "Service has already been stopped"


class CommandError(DaemonError):
    """A native service-control command could not be run or exited non-zero."""

    code = ErrorCode.COMMAND_FAILED

    def __init__(
        self,
        cmd: list[str],
        returncode: int | None = None,
        output: str = "",
        message: str | None = None,
    ):
        self.cmd = list(cmd)
        self.returncode = returncode
        self.output = output
        if message is None:
            message = f"{' '.join(self.cmd)} failed"
            if returncode is not None:
                message += f" (exit code {returncode})"
            if output:
                message += f": {output}"
        super().__init__(message)


class DefinitionIOError(DaemonError):
    """Wraps an OSError raised while touching a service definition file."""

    code = ErrorCode.IO_ERROR

    def __init__(self, path: str, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"{path}: {cause.strerror or cause}")


class TemplateRenderError(DaemonError):
    code = ErrorCode.TEMPLATE_ERROR
    default_message = "Service definition template could not be rendered"


class UnsupportedPlatformError(DaemonError):
    code = ErrorCode.UNSUPPORTED_PLATFORM
    default_message = "No supported service manager on this platform"
