"""Pytest configuration and shared fixtures for session manager tests."""

import json
import logging
import shlex
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from hypr_session_manager.core.models import BATCH_SEPARATOR, CmdlineLookup, SessionData, Window


def build_client(
    address: str,
    window_class: str,
    workspace_id: int = 1,
    at: tuple = (0, 0),
    size: tuple = (800, 600),
    floating: bool = False,
    pid: int = 1000,
    title: str = "",
) -> Dict[str, Any]:
    """Build a client record shaped like `hyprctl clients -j` output."""
    return {
        "address": address,
        "mapped": True,
        "hidden": False,
        "at": list(at),
        "size": list(size),
        "workspace": {"id": workspace_id, "name": str(workspace_id)},
        "floating": floating,
        "monitor": 0,
        "class": window_class,
        "title": title or window_class,
        "pid": pid,
        "pinned": False,
        "fullscreen": 0,
    }


def build_window(address: str, window_class: str, cmdline: str = "", **kwargs) -> Window:
    """Build a saved Window record."""
    return Window.model_validate({**build_client(address, window_class, **kwargs), "cmdline": cmdline})


class FakeCompositor:
    """In-memory stand-in for hyprctl.

    Understands the queries and dispatchers the session manager uses and
    records every command it receives.
    """

    def __init__(self, clients: Optional[List[Dict[str, Any]]] = None, active: Optional[str] = None):
        self.clients = list(clients or [])
        self.active = active
        self.commands: List[str] = []
        self.fail_on: Dict[str, Exception] = {}
        self.clients_output: Optional[str] = None

    async def execute(self, command: str) -> str:
        self.commands.append(command)

        for prefix, error in self.fail_on.items():
            if command.startswith(prefix):
                raise error

        if command == "clients -j":
            if self.clients_output is not None:
                return self.clients_output
            return json.dumps(self.clients)

        if command == "activewindow -j":
            for client in self.clients:
                if client["address"] == self.active:
                    return json.dumps(client)
            return "{}"

        if command.startswith("dispatch closewindow address:"):
            address = command.split("address:", 1)[1]
            self.clients = [c for c in self.clients if c["address"] != address]
            return "ok"

        return "ok"

    @property
    def dispatches(self) -> List[str]:
        return [c for c in self.commands if c.startswith("dispatch ")]

    @property
    def batches(self) -> List[List[str]]:
        """Directives of each --batch call, in call order."""
        result = []
        for command in self.commands:
            if command.startswith("--batch "):
                argument = shlex.split(command)[1]
                result.append(argument.split(BATCH_SEPARATOR))
        return result


class FakeLauncher:
    """Records spawned commands; optionally maps a window per spawn."""

    def __init__(self, compositor: Optional[FakeCompositor] = None, spawns: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self.compositor = compositor
        self.spawns = spawns or {}
        self.launched: List[str] = []
        self.failing: set = set()

    def spawn(self, command: str) -> bool:
        if command in self.failing:
            return False
        self.launched.append(command)
        if self.compositor is not None and self.spawns.get(command):
            self.compositor.clients.append(self.spawns[command].pop(0))
        return True


async def no_sleep(seconds: float) -> None:
    return None


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging() so handlers never outlive a test's captured stderr."""
    yield
    logger = logging.getLogger("hypr_session_manager")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def make_client():
    """Factory for hyprctl client records."""
    return build_client


@pytest.fixture
def make_window():
    """Factory for saved Window records."""
    return build_window


@pytest.fixture
def make_compositor():
    """Factory for fake compositors."""
    return FakeCompositor


@pytest.fixture
def make_launcher():
    """Factory for fake launchers."""
    return FakeLauncher


@pytest.fixture
def fake_sleep():
    """Settle-delay replacement that returns immediately."""
    return no_sleep


@pytest.fixture
def compositor() -> FakeCompositor:
    return FakeCompositor()


@pytest.fixture
def cmdline_table() -> Dict[int, str]:
    """pid -> cmdline; pids not listed fail lookup."""
    return {}


@pytest.fixture
def cmdline_reader(cmdline_table):
    def reader(pid: int) -> CmdlineLookup:
        if pid in cmdline_table:
            return CmdlineLookup(pid=pid, cmdline=cmdline_table[pid])
        return CmdlineLookup(pid=pid, error="process no longer exists")
    return reader


@pytest.fixture
def sessions_dir(tmp_path: Path) -> Path:
    return tmp_path / "sessions"


@pytest.fixture
def sample_session() -> SessionData:
    return SessionData(windows=[
        build_window("0xa1", "firefox", cmdline="firefox", workspace_id=1, at=(10, 40), size=(940, 1020), pid=101),
        build_window("0xa2", "kitty", cmdline="kitty", workspace_id=2, at=(960, 40), size=(950, 500), pid=102),
        build_window("0xa3", "kitty", cmdline="kitty", workspace_id=2, at=(960, 550), size=(950, 510), floating=True, pid=103),
    ])
