"""Unit tests for launch command recovery from the process table."""

import os
import shlex
from unittest.mock import MagicMock, patch

import psutil
import pytest

from hypr_session_manager.core.process_table import read_cmdline


PROCESS = "hypr_session_manager.core.process_table.psutil.Process"


def _process_with_args(args):
    process = MagicMock()
    process.cmdline.return_value = args
    return process


class TestReadCmdline:
    """Tests for read_cmdline."""

    def test_joins_arguments_with_spaces(self):
        """Test argv is rejoined into a single command line."""
        with patch(PROCESS, return_value=_process_with_args(["/usr/bin/kitty", "--single-instance"])):
            lookup = read_cmdline(4242)

        assert lookup.ok
        assert lookup.cmdline == "/usr/bin/kitty --single-instance"
        assert lookup.pid == 4242

    def test_quoting_preserves_argv(self):
        """Test arguments with spaces or shell metacharacters split back exactly."""
        argv = ["/usr/bin/firefox", "--profile", "/home/u/My Profile", "https://x/?a=1&b=2"]

        with patch(PROCESS, return_value=_process_with_args(argv)):
            lookup = read_cmdline(4242)

        assert shlex.split(lookup.cmdline) == argv

    def test_drops_empty_arguments(self):
        """Test trailing empty argv entries do not leave stray spaces."""
        with patch(PROCESS, return_value=_process_with_args(["firefox", "", ""])):
            lookup = read_cmdline(4242)

        assert lookup.cmdline == "firefox"

    @pytest.mark.parametrize("error, reason", [
        (psutil.NoSuchProcess(4242), "no longer exists"),
        (psutil.AccessDenied(4242), "access denied"),
        (psutil.ZombieProcess(4242), "zombie"),
    ])
    def test_process_errors_are_soft_failures(self, error, reason):
        """Test psutil errors become an empty cmdline with a reason."""
        with patch(PROCESS, side_effect=error):
            lookup = read_cmdline(4242)

        assert not lookup.ok
        assert lookup.cmdline == ""
        assert reason in lookup.error

    def test_empty_argv(self):
        """Test kernel threads and similar report an empty command line."""
        with patch(PROCESS, return_value=_process_with_args([])):
            lookup = read_cmdline(2)

        assert not lookup.ok
        assert lookup.error == "empty command line"

    @pytest.mark.parametrize("pid", [0, -1])
    def test_invalid_pid(self, pid):
        """Test non-positive pids are rejected without touching psutil."""
        with patch(PROCESS) as mock_process:
            lookup = read_cmdline(pid)

        assert not lookup.ok
        mock_process.assert_not_called()

    def test_reads_current_process(self):
        """Test a live process yields its real command line."""
        lookup = read_cmdline(os.getpid())

        assert lookup.ok
        assert lookup.cmdline
