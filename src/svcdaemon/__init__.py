"""svcdaemon: install and control a program as a native OS service."""

__version__ = "0.1.0"

from svcdaemon.daemon.manager import ServiceManager, new_daemon
from svcdaemon.errors import (
    AlreadyInstalledError,
    AlreadyRunningError,
    AlreadyStoppedError,
    CommandError,
    DaemonError,
    DefinitionIOError,
    ErrorCode,
    NotInstalledError,
    PermissionDeniedError,
    TemplateRenderError,
    UnsupportedPlatformError,
)
from svcdaemon.models import ActionResult, BackendKind, PathResult, RunState, ServiceDescriptor, StatusResult

__all__ = [
    '__version__',
    'ServiceManager',
    'new_daemon',
    'ActionResult',
    'BackendKind',
    'PathResult',
    'RunState',
    'ServiceDescriptor',
    'StatusResult',
    'AlreadyInstalledError',
    'AlreadyRunningError',
    'AlreadyStoppedError',
    'CommandError',
    'DaemonError',
    'DefinitionIOError',
    'ErrorCode',
    'NotInstalledError',
    'PermissionDeniedError',
    'TemplateRenderError',
    'UnsupportedPlatformError',
]
