"""
Session Restore Module

Restores a saved session by:
1. Closing every window except the one running the restore
2. Relaunching the saved applications
3. Waiting a fixed settle delay for them to map windows
4. Pairing saved windows with the new ones by class and position
5. Replaying workspace, floating and geometry state in one batched dispatch

Pairing is positional within a class: the i-th saved window of class C is
matched with the i-th live window of class C, in the order hyprctl reports
them. This relies on applications of the same class mapping their windows in
a stable order. Saved windows without a live counterpart are skipped.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Iterable, List, Optional, Tuple

from .errors import GatewayError
from .hyprctl import CommandGateway, dispatch, dispatch_batch
from .launch import ApplicationLauncher, resolve_launch_command
from .models import Directive, DirectiveBatch, DirectiveType, SessionData, Window
from .snapshot import SessionSnapshotReader


logger = logging.getLogger(__name__)


DEFAULT_SETTLE_DELAY = 3.0


@dataclass
class RestoreReport:
    """Outcome of a restore run."""
    windows_closed: int = 0
    close_failures: int = 0
    windows_launched: int = 0
    windows_skipped: int = 0
    windows_paired: int = 0
    windows_unpaired: int = 0
    batch_command: Optional[str] = None


def group_by_class(windows: Iterable[Window]) -> Dict[str, List[Window]]:
    """
    Group windows by class, keeping first-seen class order and the relative
    order of windows within each class.
    """
    groups: Dict[str, List[Window]] = {}
    for window in windows:
        groups.setdefault(window.window_class, []).append(window)
    return groups


def pair_windows(
    saved_groups: Dict[str, List[Window]],
    live_groups: Dict[str, List[Window]],
) -> List[Tuple[Window, Window]]:
    """
    Pair saved windows with live windows by class and index

    Args:
        saved_groups: Saved windows grouped by class
        live_groups: Currently open windows grouped by class

    Returns:
        (saved, live) pairs, in saved class order then saved window order
    """
    pairs: List[Tuple[Window, Window]] = []

    for window_class, saved_windows in saved_groups.items():
        live_windows = live_groups.get(window_class, [])

        for index, saved in enumerate(saved_windows):
            if index >= len(live_windows):
                logger.debug(
                    f"No live window for {window_class} #{index} "
                    f"({len(live_windows)} open, {len(saved_windows)} saved)"
                )
                continue
            pairs.append((saved, live_windows[index]))

    return pairs


def build_directives(pairs: Iterable[Tuple[Window, Window]]) -> DirectiveBatch:
    """
    Build the placement directives for each (saved, live) pair

    Per pair, in order: move to workspace, toggle floating (saved floating
    windows only), move to the saved pixel position, resize to the saved size.
    All directives address the live window.
    """
    directives: List[Directive] = []

    for saved, live in pairs:
        address = live.address

        if saved.workspace.id is not None:
            directives.append(Directive(
                address=address,
                directive_type=DirectiveType.MOVE_TO_WORKSPACE,
                params={"workspace_id": saved.workspace.id},
            ))

        if saved.floating:
            directives.append(Directive(
                address=address,
                directive_type=DirectiveType.TOGGLE_FLOATING,
            ))

        directives.append(Directive(
            address=address,
            directive_type=DirectiveType.MOVE_PIXEL,
            params={"x": saved.at[0], "y": saved.at[1]},
        ))
        directives.append(Directive(
            address=address,
            directive_type=DirectiveType.RESIZE_PIXEL,
            params={"width": saved.size[0], "height": saved.size[1]},
        ))

    return DirectiveBatch(directives=directives)


class SessionRestorer:
    """
    Restores a saved session against the live compositor

    The run is linear and cannot be cancelled: once windows have been closed
    the restore carries on to the end, or stops at the first fatal
    GatewayError.
    """

    def __init__(
        self,
        gateway: CommandGateway,
        reader: Optional[SessionSnapshotReader] = None,
        launcher: Optional[ApplicationLauncher] = None,
        settle_delay: float = DEFAULT_SETTLE_DELAY,
        resolve_missing_commands: bool = False,
        class_overrides: Optional[Dict[str, str]] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initialize session restorer

        Args:
            gateway: Compositor command gateway
            reader: Snapshot reader (default: one built on `gateway`)
            launcher: Application launcher (default: ApplicationLauncher())
            settle_delay: Seconds to wait after relaunching before re-snapshot
            resolve_missing_commands: Resolve a launch command from the window
                class when the saved cmdline is empty, instead of skipping
            class_overrides: Extra class -> executable mappings for resolution
            sleep: Awaitable used for the settle delay
        """
        self.gateway = gateway
        self.reader = reader or SessionSnapshotReader(gateway)
        self.launcher = launcher or ApplicationLauncher()
        self.settle_delay = settle_delay
        self.resolve_missing_commands = resolve_missing_commands
        self.class_overrides = class_overrides or {}
        self.sleep = sleep

    async def restore(self, saved: SessionData) -> RestoreReport:
        """
        Restore `saved` into the live session

        Args:
            saved: Previously captured session

        Returns:
            RestoreReport with counts for each phase

        Raises:
            GatewayError: If querying the compositor or the final batch fails
            CaptureError: If a snapshot cannot be interpreted
        """
        report = RestoreReport()

        if not saved.windows:
            logger.info("No windows to restore - session data is empty")
            return report

        logger.info(f"Restoring session with {len(saved.windows)} windows")

        survivor = await self.reader.active_window_address()
        logger.debug(f"Keeping active window: {survivor}")

        await self._close_windows(survivor, report)

        saved_groups = group_by_class(saved.windows)

        self._relaunch(saved.windows, report)

        logger.info(f"Waiting {self.settle_delay}s for applications to register windows")
        await self.sleep(self.settle_delay)

        current = await self.reader.capture()
        live_groups = group_by_class(current.windows)

        pairs = pair_windows(saved_groups, live_groups)
        report.windows_paired = len(pairs)
        report.windows_unpaired = len(saved.windows) - len(pairs)

        batch = build_directives(pairs)
        if batch.directives:
            report.batch_command = batch.to_batch_argument()
            logger.info(f"Positioning {len(pairs)} windows ({len(batch)} directives)")
            await dispatch_batch(self.gateway, batch)
        else:
            logger.warning("No relaunched windows matched the saved session")

        logger.info(
            f"Session restore complete: {report.windows_launched} launched, "
            f"{report.windows_paired} positioned, {report.windows_unpaired} unmatched"
        )
        return report

    async def _close_windows(self, survivor: Optional[str], report: RestoreReport) -> None:
        """Close every live window except the survivor, best effort."""
        current = await self.reader.capture()

        for window in current.windows:
            if window.address == survivor:
                continue

            directive = Directive(address=window.address, directive_type=DirectiveType.CLOSE)
            try:
                await dispatch(self.gateway, directive)
                report.windows_closed += 1
            except GatewayError as e:
                logger.warning(f"Failed to close {window.window_class} ({window.address}): {e}")
                report.close_failures += 1

    def _relaunch(self, windows: List[Window], report: RestoreReport) -> None:
        """Spawn one process per saved window, without waiting on any of them."""
        for window in windows:
            command = window.cmdline

            if not command and self.resolve_missing_commands:
                command = resolve_launch_command(window.window_class, self.class_overrides)
                logger.info(f"Resolved launch command for {window.window_class}: {command}")

            if not command:
                logger.warning(
                    f"No command line for {window.window_class} "
                    f"(address {window.address}) - skipping launch"
                )
                report.windows_skipped += 1
                continue

            if self.launcher.spawn(command):
                report.windows_launched += 1
            else:
                report.windows_skipped += 1


async def restore_session(
    gateway: CommandGateway,
    saved: SessionData,
    settle_delay: float = DEFAULT_SETTLE_DELAY,
) -> RestoreReport:
    """
    Convenience function to restore a session

    Args:
        gateway: Compositor command gateway
        saved: Session to restore
        settle_delay: Seconds to wait for relaunched applications

    Returns:
        RestoreReport
    """
    return await SessionRestorer(gateway, settle_delay=settle_delay).restore(saved)
