"""Tests for the SysV init backend."""

import os
import stat
from pathlib import Path

import pytest

from svcdaemon.daemon.backends import SysVBackend
from svcdaemon.errors import AlreadyRunningError, CommandError, NotInstalledError, TemplateRenderError

STATUS = ["service", "foo", "status"]


@pytest.fixture
def backend(make_backend):
    return make_backend(SysVBackend)


@pytest.fixture
def installed(backend, runner):
    assert backend.install().ok
    runner.calls.clear()
    return backend


class TestInstall:
    """Test SysVBackend.install."""

    def test_writes_executable_script(self, backend, settings):
        result = backend.install(["--x"])

        assert result.ok
        script = Path(settings.paths.init_dir) / "foo"
        assert backend.service_path == script
        assert stat.S_IMODE(script.stat().st_mode) == 0o755
        assert script.read_text().startswith("#! /bin/sh")

    def test_creates_runlevel_links(self, backend, settings, tmp_path):
        backend.install()

        etc = tmp_path / "etc"
        expected = [etc / f"rc{level}.d" / "S87foo" for level in "2345"]
        expected += [etc / f"rc{level}.d" / "K17foo" for level in "016"]
        assert backend.runlevel_links() == expected
        for link in expected:
            assert link.is_symlink()
            assert Path(os.readlink(link)) == backend.service_path

    def test_existing_link_does_not_fail_install(self, backend, tmp_path):
        stale = tmp_path / "etc" / "rc3.d" / "S87foo"
        stale.symlink_to("/nonexistent")

        result = backend.install()

        assert result.ok
        assert os.readlink(stale) == "/nonexistent"
        assert (tmp_path / "etc" / "rc2.d" / "S87foo").is_symlink()

    def test_missing_rc_directory_is_skipped(self, backend, tmp_path):
        (tmp_path / "etc" / "rc1.d").rmdir()

        result = backend.install()

        assert result.ok
        assert (tmp_path / "etc" / "rc0.d" / "K17foo").is_symlink()

    def test_runs_no_native_commands(self, backend, runner):
        backend.install()
        assert runner.calls == []

    def test_program_arguments_are_shell_quoted(self, backend):
        assert backend.install(["--msg", "a b", "$(id)", "`id`"]).ok

        script = backend.service_path.read_text()
        assert "$exec --msg 'a b' '$(id)' '`id`' >> $stdoutlog" in script

    @pytest.mark.parametrize("path", ['/opt/a"b/foo', "/opt/$HOME/foo", "/opt/`id`/foo"])
    def test_program_path_that_breaks_quoting_is_rejected(self, settings, runner, descriptor, path):
        backend = SysVBackend(
            descriptor, settings, runner=runner, privilege_check=lambda: True, exec_resolver=lambda: path
        )

        result = backend.install()

        assert isinstance(result.error, TemplateRenderError)
        assert not backend.service_path.exists()
        assert not (Path(settings.paths.rc_root) / "rc2.d" / "S87foo").is_symlink()


class TestRemove:
    """Test SysVBackend.remove."""

    def test_deletes_script_and_links(self, installed):
        result = installed.remove()

        assert result.ok
        assert not installed.service_path.exists()
        for link in installed.runlevel_links():
            assert not link.is_symlink()

    def test_missing_links_are_ignored(self, installed):
        installed.runlevel_links()[0].unlink()

        assert installed.remove().ok

    def test_not_installed(self, backend):
        assert isinstance(backend.remove().error, NotInstalledError)


class TestRuntime:
    """Start, stop and status go through ``service``."""

    def test_start(self, installed, runner):
        result = installed.start()

        assert result.ok
        assert runner.calls == [STATUS, ["service", "foo", "start"]]

    def test_start_when_running(self, installed, runner):
        runner.set(STATUS, stdout="Foo Service (foo) is running [pid  1234]\n")

        assert isinstance(installed.start().error, AlreadyRunningError)

    def test_stop(self, installed, runner):
        runner.set(STATUS, stdout="Foo Service (foo) is running [pid  1234]\n")

        assert installed.stop().ok
        assert runner.calls[-1] == ["service", "foo", "stop"]

    def test_restart(self, installed, runner):
        assert installed.restart().ok
        assert runner.calls == [["service", "foo", "restart"]]

    def test_status_running(self, installed, runner):
        runner.set(STATUS, stdout="Foo Service (foo) is running [pid  1234]\n")

        result = installed.status()

        assert result.running is True
        assert result.pid == 1234

    def test_status_stopped(self, installed, runner):
        runner.set(STATUS, stdout="Foo Service (foo) is stopped\n", returncode=3)

        result = installed.status()

        assert result.ok
        assert result.running is False


class TestExecPath:
    """Test SysVBackend.exec_path."""

    def test_asks_the_init_script(self, installed, runner):
        runner.set(["service", "foo", "execpath"], stdout="/usr/bin/foo\n")

        assert installed.exec_path() == ("/usr/bin/foo", None)

    def test_named_service(self, installed, runner):
        runner.set(["service", "bar", "execpath"], stdout="/opt/bar\n")

        assert installed.exec_path("bar").path == "/opt/bar"

    def test_failure(self, installed, runner):
        runner.set(["service", "foo", "execpath"], returncode=1, stderr="unrecognized service")

        result = installed.exec_path()

        assert isinstance(result.error, CommandError)
        assert result.path == ""
