"""
Session Snapshot Module

Captures the current Hyprland session as a SessionData:
1. Query `hyprctl clients -j` for the window list
2. Recover each window's launch command from the process table
3. Preserve the order the compositor reports

No windows is a valid state and yields an empty snapshot. A command line
that cannot be recovered only blanks that one window's `cmdline`.
"""

import asyncio
import json
import logging
from datetime import datetime
from typing import Callable, Optional

from pydantic import ValidationError

from .errors import CaptureError
from .hyprctl import CommandGateway
from .models import CmdlineLookup, SessionData, Window
from .process_table import read_cmdline


logger = logging.getLogger(__name__)


CLIENTS_QUERY = "clients -j"
ACTIVE_WINDOW_QUERY = "activewindow -j"


class SessionSnapshotReader:
    """
    Reads the live window list from the compositor.

    The process-table reader is injectable so captures can be tested without
    real processes.
    """

    def __init__(
        self,
        gateway: CommandGateway,
        cmdline_reader: Optional[Callable[[int], CmdlineLookup]] = None,
    ):
        """
        Initialize snapshot reader

        Args:
            gateway: Compositor command gateway
            cmdline_reader: Maps a pid to its launch command lookup
                (default: read_cmdline, backed by psutil)
        """
        self.gateway = gateway
        self.cmdline_reader = cmdline_reader or read_cmdline

    async def capture(self) -> SessionData:
        """
        Capture all current windows with their launch commands

        Returns:
            SessionData in compositor order (empty when there are no windows)

        Raises:
            GatewayError: If hyprctl fails
            CaptureError: If the output is not JSON or holds invalid window records
        """
        raw = await self.gateway.execute(CLIENTS_QUERY)

        if not raw.strip():
            logger.info("No windows detected - returning empty snapshot")
            return SessionData(captured_at=datetime.now())

        try:
            clients = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CaptureError(f"Window list is not valid JSON: {e}") from e

        if not isinstance(clients, list):
            logger.warning(f"Unexpected window list structure: {type(clients).__name__}")
            return SessionData(captured_at=datetime.now())

        windows = [self._parse_window(client, index) for index, client in enumerate(clients)]

        lookups = []
        for window in windows:
            lookups.append(await asyncio.to_thread(self.cmdline_reader, window.pid))

        enriched = []
        for window, lookup in zip(windows, lookups):
            if not lookup.ok:
                logger.warning(
                    f"Failed to read cmdline for {window.window_class} "
                    f"(pid {window.pid}): {lookup.error}"
                )
            enriched.append(window.model_copy(update={"cmdline": lookup.cmdline}))

        recovered = sum(1 for lookup in lookups if lookup.ok)
        logger.info(f"Captured {len(enriched)} windows ({recovered} with launch commands)")

        return SessionData(windows=enriched, captured_at=datetime.now())

    async def active_window_address(self) -> Optional[str]:
        """
        Get the address of the focused window

        Returns:
            Window address, or None when nothing is focused

        Raises:
            GatewayError: If hyprctl fails
        """
        raw = await self.gateway.execute(ACTIVE_WINDOW_QUERY)

        try:
            active = json.loads(raw) if raw.strip() else {}
        except json.JSONDecodeError:
            logger.debug(f"No parsable active window: {raw.strip()[:80]}")
            return None

        if not isinstance(active, dict):
            return None

        return active.get("address") or None

    def _parse_window(self, client, index: int) -> Window:
        """Validate one hyprctl client record."""
        if not isinstance(client, dict):
            raise CaptureError(f"Window entry {index} is not an object: {client!r}")

        # cmdline always comes from the process table, never from hyprctl
        client = {key: value for key, value in client.items() if key != "cmdline"}

        try:
            return Window.model_validate(client)
        except ValidationError as e:
            raise CaptureError(f"Window entry {index} is invalid: {e}") from e


async def capture_session(gateway: CommandGateway) -> SessionData:
    """
    Convenience function to capture the current session

    Args:
        gateway: Compositor command gateway

    Returns:
        SessionData snapshot
    """
    return await SessionSnapshotReader(gateway).capture()
