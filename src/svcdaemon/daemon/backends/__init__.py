"""Native service-manager backends."""

from svcdaemon.models import BackendKind

from .base import ServiceBackend
from .launchd import LaunchdBackend, parse_launchd_status
from .systemd import SystemdBackend, parse_systemd_status
from .sysv import SysVBackend, parse_sysv_status

BACKENDS: dict[BackendKind, type[ServiceBackend]] = {
    BackendKind.SYSTEMD: SystemdBackend,
    BackendKind.SYSV: SysVBackend,
    BackendKind.LAUNCHD: LaunchdBackend,
}

__all__ = [
    'BACKENDS',
    'LaunchdBackend',
    'ServiceBackend',
    'SysVBackend',
    'SystemdBackend',
    'parse_launchd_status',
    'parse_systemd_status',
    'parse_sysv_status',
]
