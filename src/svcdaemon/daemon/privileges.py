"""Privilege guard run before every backend operation."""

import os
from collections.abc import Callable

from svcdaemon.errors import PermissionDeniedError

PrivilegeCheck = Callable[[], bool]


def has_root_privileges() -> bool:
    """Return True when running as the superuser.

    Platforms without ``os.geteuid`` (Windows) never qualify.
    """
    geteuid = getattr(os, "geteuid", None)
    if geteuid is None:
        return False
    return geteuid() == 0


def require_privileges(check: PrivilegeCheck = has_root_privileges) -> None:
    """Raise PermissionDeniedError unless ``check()`` passes."""
    if not check():
        raise PermissionDeniedError()
