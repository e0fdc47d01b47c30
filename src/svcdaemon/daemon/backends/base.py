"""Abstract base for native service-manager backends.

ServiceBackend implements the lifecycle contract once (privilege guard,
installed/running preconditions, result messages) and leaves the parts that
differ between service managers to subclasses:

    - service_path / template / template_fields: where and what to write
    - register / _teardown: enable-on-boot and its reverse
    - _control / _status_command / parse_status: runtime actions and the
      status-text grammar
    - _query_exec_path: the executable the manager has on record

Lifecycle methods never raise DaemonError. They return it inside an
ActionResult, StatusResult or PathResult next to the action message.
"""

import os
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from pathlib import Path

from svcdaemon.config import Settings, get_settings
from svcdaemon.daemon.commands import CommandRunner, check_command, run_command
from svcdaemon.daemon.executable import resolve_executable_path
from svcdaemon.daemon.logging_setup import get_logger
from svcdaemon.daemon.privileges import PrivilegeCheck, has_root_privileges, require_privileges
from svcdaemon.daemon.templates import render_template
from svcdaemon.errors import (
    AlreadyInstalledError,
    AlreadyRunningError,
    AlreadyStoppedError,
    CommandError,
    DaemonError,
    DefinitionIOError,
    NotInstalledError,
    TemplateRenderError,
)
from svcdaemon.models import ActionResult, BackendKind, PathResult, RunState, ServiceDescriptor, StatusResult

SUCCESS = "\t\t\t\t\t[  OK  ]"
FAILED = "\t\t\t\t\t[FAILED]"


def running_state(name: str, pid: int | None = None) -> RunState:
    """Build the RunState reported for a running service."""
    if pid is not None:
        return RunState(True, pid, f"Service {name} (pid  {pid}) is running...")
    return RunState(True, None, f"Service {name} is running...")


def stopped_state(name: str) -> RunState:
    """Build the RunState reported for a stopped service."""
    return RunState(False, None, f"Service {name} is stopped")


class ServiceBackend(ABC):
    """ABC that each native service manager backend implements."""

    kind: BackendKind
    template: str
    file_mode: int = 0o644

    def __init__(
        self,
        descriptor: ServiceDescriptor,
        settings: Settings | None = None,
        *,
        runner: CommandRunner | None = None,
        privilege_check: PrivilegeCheck | None = None,
        exec_resolver: Callable[[], str] | None = None,
    ):
        self.descriptor = descriptor
        self.settings = settings or get_settings()
        self._run = runner or run_command
        self._privilege_check = privilege_check or has_root_privileges
        self._resolve_exec = exec_resolver or resolve_executable_path
        self.logger = get_logger(__name__, service=descriptor.name, backend=str(self.kind))

    @property
    def name(self) -> str:
        return self.descriptor.name

    # ------------------------------------------------------------------
    # Backend-specific hooks
    # ------------------------------------------------------------------

    @property
    @abstractmethod
    def service_path(self) -> Path:
        """Canonical location of the rendered definition file."""

    @abstractmethod
    def template_fields(self, exec_path: str, args: list[str]) -> dict[str, str]:
        """Placeholder values for ``self.template``."""

    @abstractmethod
    def register(self) -> None:
        """Register the written definition with the service manager.

        Raises:
            DaemonError: If registration fails
        """

    @abstractmethod
    def _teardown(self) -> DaemonError | None:
        """Unregister and delete everything install created.

        Every step is attempted; the first failure is returned.
        """

    @abstractmethod
    def _control(self, verb: str) -> None:
        """Run the native start/stop/restart action.

        Raises:
            CommandError: If the native command fails
        """

    @abstractmethod
    def _status_command(self) -> list[str]:
        """Native command whose output parse_status understands."""

    @abstractmethod
    def parse_status(self, output: str) -> RunState:
        """Turn native status output into a RunState. Never raises."""

    @abstractmethod
    def _query_exec_path(self, service_name: str) -> str:
        """Ask the service manager for the executable of ``service_name``.

        Raises:
            DaemonError: If the path cannot be determined
        """

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    def is_installed(self) -> bool:
        """Return True if the definition file exists. Never cached."""
        return self.service_path.exists()

    def check_running(self) -> RunState:
        """Query the service manager for the live running state.

        A command that cannot run or exits non-zero means stopped.
        """
        try:
            result = self._run(self._status_command())
        except CommandError as e:
            self.logger.debug("Status command unavailable: {}", e)
            return stopped_state(self.name)
        if result.returncode != 0:
            return stopped_state(self.name)
        return self.parse_status(result.stdout or "")

    def render_definition(self, args: Sequence[str] = ()) -> str:
        """Render the definition file text without writing it.

        Raises:
            TemplateRenderError: If the template cannot be filled
        """
        exec_path = self._resolve_exec()
        args = list(args)
        for value in (exec_path, *args):
            if any(ord(ch) < 32 or ord(ch) == 127 for ch in value):
                raise TemplateRenderError(f"Program path or argument contains a control character: {value!r}")
        return render_template(self.template, self.template_fields(exec_path, args))

    def _native(self, *cmd: str) -> str:
        return check_command(self._run, cmd)

    def _guard(self) -> None:
        require_privileges(self._privilege_check)

    def _require_installed(self) -> None:
        if not self.is_installed():
            raise NotInstalledError()

    def _write_definition(self, text: str) -> None:
        path = self.service_path
        try:
            path.write_text(text, encoding="utf-8")
            os.chmod(path, self.file_mode)
        except OSError as e:
            raise DefinitionIOError(str(path), e) from e

    def _delete_definition(self) -> None:
        path = self.service_path
        try:
            path.unlink()
        except OSError as e:
            raise DefinitionIOError(str(path), e) from e

    @staticmethod
    def _attempt_all(*steps: Callable[[], None]) -> DaemonError | None:
        """Run every step, returning the first DaemonError raised."""
        first: DaemonError | None = None
        for step in steps:
            try:
                step()
            except DaemonError as e:
                if first is None:
                    first = e
        return first

    def _succeeded(self, action: str) -> ActionResult:
        self.logger.info("{} done", action)
        return ActionResult(action + SUCCESS)

    def _failed(self, action: str, error: DaemonError) -> ActionResult:
        self.logger.warning("{} failed: {}", action, error)
        return ActionResult(action + FAILED, error)

    # ------------------------------------------------------------------
    # Lifecycle contract
    # ------------------------------------------------------------------

    def install(self, args: Sequence[str] = ()) -> ActionResult:
        """Render, write and register the service definition."""
        action = f"Install {self.descriptor.description}:"
        try:
            self._guard()
            if self.is_installed():
                raise AlreadyInstalledError()
            text = self.render_definition(args)
            self._write_definition(text)
            self.register()
        except DaemonError as e:
            return self._failed(action, e)
        return self._succeeded(action)

    def remove(self) -> ActionResult:
        """Unregister the service and delete its definition file."""
        action = f"Removing {self.descriptor.description}:"
        try:
            self._guard()
            self._require_installed()
        except DaemonError as e:
            return self._failed(action, e)
        error = self._teardown()
        if error is not None:
            return self._failed(action, error)
        return self._succeeded(action)

    def start(self) -> ActionResult:
        action = f"Starting {self.descriptor.description}:"
        try:
            self._guard()
            self._require_installed()
            if self.check_running().running:
                raise AlreadyRunningError()
            self._control("start")
        except DaemonError as e:
            return self._failed(action, e)
        return self._succeeded(action)

    def stop(self) -> ActionResult:
        action = f"Stopping {self.descriptor.description}:"
        try:
            self._guard()
            self._require_installed()
            if not self.check_running().running:
                raise AlreadyStoppedError()
            self._control("stop")
        except DaemonError as e:
            return self._failed(action, e)
        return self._succeeded(action)

    def restart(self) -> ActionResult:
        """Issue the native restart action regardless of running state."""
        action = f"Restarting {self.descriptor.description}:"
        try:
            self._guard()
            self._require_installed()
            self._control("restart")
        except DaemonError as e:
            return self._failed(action, e)
        return self._succeeded(action)

    def status(self) -> StatusResult:
        """Report whether the service is running. Stopped is not an error."""
        try:
            self._guard()
        except DaemonError as e:
            return StatusResult("", e)
        if not self.is_installed():
            return StatusResult("Status could not defined", NotInstalledError())
        state = self.check_running()
        return StatusResult(state.message, None, state.running, state.pid)

    def exec_path(self, service_name: str = "") -> PathResult:
        """Return the executable path the service manager has on record."""
        try:
            self._guard()
            self._require_installed()
            path = self._query_exec_path(service_name or self.name)
        except DaemonError as e:
            self.logger.warning("Exec path lookup failed: {}", e)
            return PathResult("", e)
        return PathResult(path)
