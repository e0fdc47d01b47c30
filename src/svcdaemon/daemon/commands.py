"""Blocking invocation of native service-control tools.

Backends receive a CommandRunner so tests can substitute a fake that records
calls and returns canned output instead of spawning processes.
"""

import subprocess
from collections.abc import Callable, Sequence

from svcdaemon.daemon.logging_setup import get_logger
from svcdaemon.errors import CommandError

logger = get_logger(__name__)

CommandRunner = Callable[[Sequence[str]], subprocess.CompletedProcess]


def run_command(cmd: Sequence[str]) -> subprocess.CompletedProcess:
    """Run ``cmd`` to completion and capture its output.

    A non-zero exit status is returned to the caller, not raised.

    Raises:
        CommandError: If the binary cannot be executed at all
    """
    logger.debug("Running {}", " ".join(cmd))
    try:
        return subprocess.run(
            list(cmd),
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        raise CommandError(list(cmd), message=f"{cmd[0]}: {e.strerror or e}") from e


def check_command(runner: CommandRunner, cmd: Sequence[str]) -> str:
    """Run ``cmd`` with ``runner`` and return stdout.

    Raises:
        CommandError: If the command cannot run or exits non-zero
    """
    result = runner(cmd)
    if result.returncode != 0:
        msg = (result.stderr or "").strip() or (result.stdout or "").strip()
        raise CommandError(list(cmd), returncode=result.returncode, output=msg)
    return result.stdout or ""
