"""Shared fixtures: settings redirected into tmp_path and a fake command runner."""

import subprocess
from collections.abc import Sequence
from pathlib import Path

import pytest

from svcdaemon.config import PathsConfig, Settings
from svcdaemon.models import ServiceDescriptor

EXEC_PATH = "/usr/bin/foo"


class FakeRunner:
    """Records native commands and returns canned results.

    Commands without a canned result succeed with empty output.
    """

    def __init__(self):
        self.calls: list[list[str]] = []
        self._responses: dict[tuple[str, ...], subprocess.CompletedProcess] = {}

    def set(self, cmd: Sequence[str], stdout: str = "", returncode: int = 0, stderr: str = "") -> None:
        self._responses[tuple(cmd)] = subprocess.CompletedProcess(list(cmd), returncode, stdout, stderr)

    def __call__(self, cmd: Sequence[str]) -> subprocess.CompletedProcess:
        cmd = list(cmd)
        self.calls.append(cmd)
        return self._responses.get(tuple(cmd), subprocess.CompletedProcess(cmd, 0, "", ""))


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings whose service-manager directories all live under tmp_path."""
    paths = PathsConfig(
        systemd_unit_dir=str(tmp_path / "etc" / "systemd" / "system"),
        systemd_marker_dir=str(tmp_path / "run" / "systemd" / "system"),
        init_dir=str(tmp_path / "etc" / "init.d"),
        rc_root=str(tmp_path / "etc"),
        launchd_dir=str(tmp_path / "Library" / "LaunchDaemons"),
    )
    for directory in (paths.systemd_unit_dir, paths.init_dir, paths.launchd_dir):
        Path(directory).mkdir(parents=True)
    for level in "0123456":
        (tmp_path / "etc" / f"rc{level}.d").mkdir()
    return Settings(paths=paths)


@pytest.fixture
def descriptor() -> ServiceDescriptor:
    return ServiceDescriptor(
        name="foo",
        port="8080",
        version="1.0",
        description="Foo Service",
        dependencies=("network.target", "syslog.target"),
    )


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def make_backend(descriptor, settings, runner):
    """Build a backend of the given class wired to the fakes."""

    def _make(backend_cls, privileged: bool = True):
        return backend_cls(
            descriptor,
            settings,
            runner=runner,
            privilege_check=lambda: privileged,
            exec_resolver=lambda: EXEC_PATH,
        )

    return _make


def snapshot(root: Path) -> dict[str, str]:
    """Map every path under root to its content (or link target)."""
    result = {}
    for path in sorted(root.rglob("*")):
        if path.is_symlink():
            result[str(path)] = f"-> {path.readlink()}"
        elif path.is_file():
            result[str(path)] = path.read_text()
        else:
            result[str(path)] = "<dir>"
    return result


@pytest.fixture
def fs_snapshot(tmp_path: Path):
    """Return a callable that snapshots everything under tmp_path."""
    return lambda: snapshot(tmp_path)
