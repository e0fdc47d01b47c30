"""macOS launchd backend: LaunchDaemon plists driven by launchctl."""

import re
from pathlib import Path
from xml.sax.saxutils import escape

from svcdaemon.daemon.backends.base import ServiceBackend, running_state, stopped_state
from svcdaemon.daemon.templates import LAUNCHD_PLIST
from svcdaemon.errors import CommandError, DaemonError
from svcdaemon.models import BackendKind, RunState

_PID_RE = re.compile(r'"PID" = ([0-9]+);')
_PROGRAM_RE = re.compile(r'"Program" = "([^"]+)";')
_PROGRAM_ARGS_RE = re.compile(r'"ProgramArguments" = \(\s*"([^"]+)"')


def parse_launchd_status(name: str, output: str) -> RunState:
    """Parse ``launchctl list <label>`` output.

    A loaded job that is not running has no ``"PID"`` entry.
    """
    match = _PID_RE.search(output)
    if match:
        return running_state(name, int(match.group(1)))
    return stopped_state(name)


class LaunchdBackend(ServiceBackend):
    """Manages a system LaunchDaemon plist."""

    kind = BackendKind.LAUNCHD
    template = LAUNCHD_PLIST

    @property
    def service_path(self) -> Path:
        return Path(self.settings.paths.launchd_dir) / f"{self.name}.plist"

    def template_fields(self, exec_path: str, args: list[str]) -> dict[str, str]:
        d = self.descriptor
        program_arguments = "\n".join(
            f"        <string>{escape(arg)}</string>" for arg in [exec_path, *args]
        )
        return {
            "name": escape(d.name),
            # XML comments must not contain "--"
            "description": escape(d.description).replace("--", "- -"),
            "version": escape(d.version).replace("--", "- -"),
            "port": escape(d.port),
            "program_arguments": program_arguments,
            "log_dir": escape(self.settings.paths.log_dir),
        }

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self) -> None:
        self._native(self.settings.commands.launchctl, "load", "-w", str(self.service_path))

    def _teardown(self) -> DaemonError | None:
        launchctl = self.settings.commands.launchctl
        return self._attempt_all(
            lambda: self._native(launchctl, "unload", "-w", str(self.service_path)),
            self._delete_definition,
        )

    # ------------------------------------------------------------------
    # Runtime
    # ------------------------------------------------------------------

    def _control(self, verb: str) -> None:
        launchctl = self.settings.commands.launchctl
        if verb == "restart":
            self._native(launchctl, "kickstart", "-k", f"system/{self.name}")
        else:
            self._native(launchctl, verb, self.name)

    def _status_command(self) -> list[str]:
        return [self.settings.commands.launchctl, "list", self.name]

    def parse_status(self, output: str) -> RunState:
        return parse_launchd_status(self.name, output)

    def _query_exec_path(self, service_name: str) -> str:
        cmd = [self.settings.commands.launchctl, "list", service_name]
        output = self._native(*cmd)
        match = _PROGRAM_RE.search(output) or _PROGRAM_ARGS_RE.search(output)
        if not match:
            raise CommandError(
                cmd,
                output=output.strip(),
                message=f"launchd reported no program for {service_name}",
            )
        return match.group(1)
