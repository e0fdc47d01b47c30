"""Resolve the on-disk path of the program being installed as a service."""

import os
import sys
from pathlib import Path


def resolve_executable_path() -> str:
    """Return the absolute path of the currently running executable.

    A console-script entry point (``sys.argv[0]`` pointing at an executable
    file) is preferred, since that is what an init system should launch.
    Otherwise the interpreter itself is returned.
    """
    argv0 = sys.argv[0] if sys.argv else ""
    if argv0:
        candidate = Path(argv0).resolve()
        if candidate.is_file() and os.access(candidate, os.X_OK):
            return str(candidate)
    return str(Path(sys.executable).resolve())
