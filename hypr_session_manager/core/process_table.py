"""Launch command recovery from the process table.

Reads a process's argv (the null-separated /proc/PID/cmdline) through psutil
and rejoins it as a shell-quoted command line, so arguments with spaces or
shell metacharacters come back unchanged when the line is run on restore.
"""

import logging
import shlex

import psutil

from .models import CmdlineLookup


logger = logging.getLogger(__name__)


def read_cmdline(pid: int) -> CmdlineLookup:
    """Recover the launch command of a process.

    Never raises: a dead, inaccessible or argv-less process yields a lookup
    with an empty cmdline and the reason in `error`.

    Args:
        pid: Process ID owning the window

    Returns:
        CmdlineLookup outcome for this pid
    """
    if pid <= 0:
        return CmdlineLookup(pid=pid, error=f"invalid pid {pid}")

    try:
        args = psutil.Process(pid).cmdline()
    except psutil.ZombieProcess:
        return CmdlineLookup(pid=pid, error="zombie process")
    except psutil.NoSuchProcess:
        return CmdlineLookup(pid=pid, error="process no longer exists")
    except psutil.AccessDenied:
        return CmdlineLookup(pid=pid, error="access denied")
    except OSError as e:
        return CmdlineLookup(pid=pid, error=str(e))

    args = [arg for arg in args if arg]
    if not args:
        return CmdlineLookup(pid=pid, error="empty command line")

    return CmdlineLookup(pid=pid, cmdline=shlex.join(args))
