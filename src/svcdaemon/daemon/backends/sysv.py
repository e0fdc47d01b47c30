"""SysV init backend: scripts in /etc/init.d driven by ``service``.

Boot-time registration is a set of rc-directory symlinks: ``S87<name>`` in
runlevels 2-5 and ``K17<name>`` in runlevels 0, 1 and 6, matching the
``chkconfig: 2345 87 17`` header of the rendered script.
"""

import os
import re
import shlex
from pathlib import Path

from svcdaemon.daemon.backends.base import ServiceBackend, running_state, stopped_state
from svcdaemon.daemon.templates import SYSV_INIT_SCRIPT
from svcdaemon.errors import DaemonError, TemplateRenderError
from svcdaemon.models import BackendKind, RunState

START_RUNLEVELS = ("2", "3", "4", "5")
KILL_RUNLEVELS = ("0", "1", "6")
START_PRIORITY = "S87"
KILL_PRIORITY = "K17"

_RUNNING_RE = re.compile(r"running")
_PID_RE = re.compile(r"pid  ([0-9]+)")


def parse_sysv_status(name: str, output: str) -> RunState:
    """Parse ``service <name> status`` output.

    Running iff the output mentions ``running`` and the service name; the
    PID comes from a ``pid  <n>`` fragment when present.
    """
    if not (_RUNNING_RE.search(output) and name in output):
        return stopped_state(name)
    match = _PID_RE.search(output)
    if match:
        return running_state(name, int(match.group(1)))
    return running_state(name)


class SysVBackend(ServiceBackend):
    """Manages a legacy init script and its runlevel symlinks."""

    kind = BackendKind.SYSV
    template = SYSV_INIT_SCRIPT
    file_mode = 0o755

    @property
    def service_path(self) -> Path:
        return Path(self.settings.paths.init_dir) / self.name

    def runlevel_links(self) -> list[Path]:
        """Symlinks created by install, start links first."""
        rc_root = Path(self.settings.paths.rc_root)
        links = [rc_root / f"rc{level}.d" / f"{START_PRIORITY}{self.name}" for level in START_RUNLEVELS]
        links += [rc_root / f"rc{level}.d" / f"{KILL_PRIORITY}{self.name}" for level in KILL_RUNLEVELS]
        return links

    def template_fields(self, exec_path: str, args: list[str]) -> dict[str, str]:
        # exec_path sits inside double quotes; args are word-split by the shell
        if any(ch in '"$`\\' for ch in exec_path):
            raise TemplateRenderError(f"Program path cannot be embedded in an init script: {exec_path!r}")
        d = self.descriptor
        return {
            "name": d.name,
            "description": d.description,
            "port": d.port,
            "version": d.version,
            "path": exec_path,
            "args": shlex.join(args),
            "pid_dir": self.settings.paths.pid_dir,
            "log_dir": self.settings.paths.log_dir,
        }

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self) -> None:
        # Best effort: a missing rc directory or an existing link is skipped.
        target = self.service_path
        for link in self.runlevel_links():
            try:
                os.symlink(target, link)
            except OSError as e:
                self.logger.debug("Skipping runlevel link {}: {}", link, e)

    def _teardown(self) -> DaemonError | None:
        error = self._attempt_all(self._delete_definition)
        for link in self.runlevel_links():
            try:
                link.unlink()
            except OSError:
                continue
        return error

    # ------------------------------------------------------------------
    # Runtime
    # ------------------------------------------------------------------

    def _control(self, verb: str) -> None:
        self._native(self.settings.commands.service, self.name, verb)

    def _status_command(self) -> list[str]:
        return [self.settings.commands.service, self.name, "status"]

    def parse_status(self, output: str) -> RunState:
        return parse_sysv_status(self.name, output)

    def _query_exec_path(self, service_name: str) -> str:
        return self._native(self.settings.commands.service, service_name, "execpath").strip()
