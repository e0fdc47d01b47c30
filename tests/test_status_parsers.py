"""Tests for the per-backend status-text parsers."""

import pytest

from svcdaemon.daemon.backends import parse_launchd_status, parse_systemd_status, parse_sysv_status

SYSTEMCTL_ACTIVE = """\
● foo.service - Foo Service
     Loaded: loaded (/etc/systemd/system/foo.service; enabled; vendor preset: enabled)
     Active: active (running) since Mon 2026-10-19 10:00:00 UTC; 2min ago
   Main PID: 4321 (foo)
      Tasks: 3 (limit: 4915)
"""

SYSTEMCTL_INACTIVE = """\
● foo.service - Foo Service
     Loaded: loaded (/etc/systemd/system/foo.service; enabled; vendor preset: enabled)
     Active: inactive (dead)
"""

LAUNCHCTL_RUNNING = """\
{
	"LimitLoadToSessionType" = "System";
	"Label" = "foo";
	"OnDemand" = false;
	"LastExitStatus" = 0;
	"PID" = 812;
	"Program" = "/usr/bin/foo";
};
"""


class TestSystemdParser:
    """Test parse_systemd_status."""

    def test_active_with_main_pid(self):
        state = parse_systemd_status("foo", SYSTEMCTL_ACTIVE)
        assert state.running is True
        assert state.pid == 4321
        assert "4321" in state.message
        assert state.message == "Service foo (pid  4321) is running..."

    def test_minimal_fixture(self):
        state = parse_systemd_status("foo", "Active: active\n...Main PID: 4321")
        assert state.running is True
        assert "4321" in state.message

    def test_active_without_pid(self):
        state = parse_systemd_status("foo", "   Active: active (exited)\n")
        assert state.running is True
        assert state.pid is None
        assert state.message == "Service foo is running..."

    def test_inactive(self):
        state = parse_systemd_status("foo", SYSTEMCTL_INACTIVE)
        assert state.running is False
        assert state.message == "Service foo is stopped"

    @pytest.mark.parametrize("output", ["", "garbage", "Main PID: 12", "Active: activating"])
    def test_unmatched_output_is_stopped(self, output):
        assert parse_systemd_status("foo", output).running is False


class TestSysVParser:
    """Test parse_sysv_status."""

    def test_running_with_pid(self):
        state = parse_sysv_status("foo", "Service foo (pid  99) is running...")
        assert state.running is True
        assert state.pid == 99
        assert "99" in state.message

    def test_init_script_output(self):
        state = parse_sysv_status("foo", "Foo Service (foo) is running [pid  1234]\n")
        assert state.running is True
        assert state.pid == 1234

    def test_running_without_pid(self):
        state = parse_sysv_status("foo", "foo is running")
        assert state.running is True
        assert state.pid is None

    def test_running_but_other_service(self):
        assert parse_sysv_status("foo", "bar (pid  5) is running").running is False

    def test_name_but_not_running(self):
        assert parse_sysv_status("foo", "foo is stopped").running is False

    def test_neither_running_nor_name(self):
        state = parse_sysv_status("foo", "unrecognized service")
        assert state.running is False
        assert state.message == "Service foo is stopped"

    def test_single_space_pid_is_not_extracted(self):
        state = parse_sysv_status("foo", "foo (pid 7) is running")
        assert state.running is True
        assert state.pid is None


class TestLaunchdParser:
    """Test parse_launchd_status."""

    def test_running(self):
        state = parse_launchd_status("foo", LAUNCHCTL_RUNNING)
        assert state.running is True
        assert state.pid == 812

    def test_loaded_not_running(self):
        output = LAUNCHCTL_RUNNING.replace('\t"PID" = 812;\n', "")
        assert parse_launchd_status("foo", output).running is False

    def test_empty(self):
        assert parse_launchd_status("foo", "").running is False
