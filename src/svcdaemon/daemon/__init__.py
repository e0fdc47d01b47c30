"""Service-control infrastructure for svcdaemon.

This package provides:
- Backend detection (systemd, SysV init, launchd)
- Service definition templates and rendering
- Per-backend lifecycle control (install, remove, start, stop, restart, status)
- The ServiceManager facade
- Logging setup and path helpers
"""

from .backends import (
    BACKENDS,
    LaunchdBackend,
    ServiceBackend,
    SysVBackend,
    SystemdBackend,
    parse_launchd_status,
    parse_systemd_status,
    parse_sysv_status,
)
from .detect import detect_backend_kind, has_systemd
from .executable import resolve_executable_path
from .logging_setup import get_logger, setup_logging
from .manager import ServiceManager, get_backend, new_daemon
from .paths import APP_NAME, get_config_dir, get_config_file_path, get_logs_dir
from .privileges import has_root_privileges, require_privileges
from .templates import LAUNCHD_PLIST, SYSTEMD_UNIT, SYSV_INIT_SCRIPT, render_template

__all__ = [
    # Backends
    'BACKENDS',
    'LaunchdBackend',
    'ServiceBackend',
    'SysVBackend',
    'SystemdBackend',
    'parse_launchd_status',
    'parse_systemd_status',
    'parse_sysv_status',
    # Detection
    'detect_backend_kind',
    'has_systemd',
    # Facade
    'ServiceManager',
    'get_backend',
    'new_daemon',
    # Collaborators
    'has_root_privileges',
    'require_privileges',
    'resolve_executable_path',
    # Templates
    'LAUNCHD_PLIST',
    'SYSTEMD_UNIT',
    'SYSV_INIT_SCRIPT',
    'render_template',
    # Logging
    'get_logger',
    'setup_logging',
    # Paths
    'APP_NAME',
    'get_config_dir',
    'get_config_file_path',
    'get_logs_dir',
]
