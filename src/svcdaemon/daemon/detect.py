"""Detect which native service manager governs this host."""

import sys
from pathlib import Path

from svcdaemon.config import Settings, get_settings
from svcdaemon.errors import UnsupportedPlatformError
from svcdaemon.models import BackendKind


def has_systemd(marker_dir: str | Path = "/run/systemd/system") -> bool:
    """Return True when systemd is the running init system.

    systemd creates ``/run/systemd/system`` early at boot; its presence is
    the documented way to tell systemd apart from other init systems.
    """
    return Path(marker_dir).is_dir()


def detect_backend_kind(
    settings: Settings | None = None,
    platform: str | None = None,
) -> BackendKind:
    """Select the backend for this host.

    Args:
        settings: Settings providing the systemd marker directory
        platform: Override for ``sys.platform``

    Returns:
        BackendKind for the detected service manager

    Raises:
        UnsupportedPlatformError: On Windows
    """
    if settings is None:
        settings = get_settings()
    if platform is None:
        platform = sys.platform

    if platform == "darwin":
        return BackendKind.LAUNCHD
    if platform == "win32":
        raise UnsupportedPlatformError(
            "Windows services are not supported; run the program in the foreground"
        )
    if has_systemd(settings.paths.systemd_marker_dir):
        return BackendKind.SYSTEMD
    return BackendKind.SYSV
