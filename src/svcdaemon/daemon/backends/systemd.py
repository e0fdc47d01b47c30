"""systemd backend: unit files under /etc/systemd/system driven by systemctl."""

import re
from pathlib import Path

from svcdaemon.daemon.backends.base import ServiceBackend, running_state, stopped_state
from svcdaemon.daemon.templates import SYSTEMD_UNIT
from svcdaemon.errors import CommandError, DaemonError
from svcdaemon.models import BackendKind, RunState

_ACTIVE_RE = re.compile(r"Active: active")
_MAIN_PID_RE = re.compile(r"Main PID: ([0-9]+)")
_EXEC_START_PATH_RE = re.compile(r"path=(\S+)")


def parse_systemd_status(name: str, output: str) -> RunState:
    """Parse ``systemctl status`` output.

    Running iff the output contains ``Active: active``; the PID comes from
    ``Main PID: <n>`` when present.
    """
    if not _ACTIVE_RE.search(output):
        return stopped_state(name)
    match = _MAIN_PID_RE.search(output)
    if match:
        return running_state(name, int(match.group(1)))
    return running_state(name)


def _unit_name(service_name: str) -> str:
    if service_name.endswith(".service"):
        return service_name
    return f"{service_name}.service"


class SystemdBackend(ServiceBackend):
    """Manages a system-wide systemd service unit."""

    kind = BackendKind.SYSTEMD
    template = SYSTEMD_UNIT

    @property
    def unit_name(self) -> str:
        return _unit_name(self.name)

    @property
    def service_path(self) -> Path:
        return Path(self.settings.paths.systemd_unit_dir) / self.unit_name

    def template_fields(self, exec_path: str, args: list[str]) -> dict[str, str]:
        d = self.descriptor
        return {
            "name": d.name,
            "description": d.description,
            "dependencies": " ".join(d.dependencies),
            "path": " ".join([exec_path, *args]),
            "port": d.port,
            "version": d.version,
            "pid_dir": self.settings.paths.pid_dir,
        }

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self) -> None:
        systemctl = self.settings.commands.systemctl
        self._native(systemctl, "daemon-reload")
        self._native(systemctl, "enable", self.unit_name)

    def _teardown(self) -> DaemonError | None:
        systemctl = self.settings.commands.systemctl
        return self._attempt_all(
            lambda: self._native(systemctl, "disable", self.unit_name),
            self._delete_definition,
            lambda: self._native(systemctl, "daemon-reload"),
        )

    # ------------------------------------------------------------------
    # Runtime
    # ------------------------------------------------------------------

    def _control(self, verb: str) -> None:
        self._native(self.settings.commands.systemctl, verb, self.unit_name)

    def _status_command(self) -> list[str]:
        return [self.settings.commands.systemctl, "status", self.unit_name]

    def parse_status(self, output: str) -> RunState:
        return parse_systemd_status(self.name, output)

    def _query_exec_path(self, service_name: str) -> str:
        # systemctl has no verb that prints only the executable; read it from
        # the ExecStart property instead.
        cmd = [
            self.settings.commands.systemctl,
            "show",
            _unit_name(service_name),
            "--property=ExecStart",
        ]
        output = self._native(*cmd)
        match = _EXEC_START_PATH_RE.search(output)
        if not match:
            raise CommandError(
                cmd,
                output=output.strip(),
                message=f"systemd reported no executable path for {_unit_name(service_name)}",
            )
        return match.group(1)
