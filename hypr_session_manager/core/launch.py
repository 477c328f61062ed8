"""
Application Launch Module

Maps window classes to executable invocations and spawns applications
during restore.

Resolution order for a class:
1. User overrides (from config)
2. Built-in overrides for classes whose binary has a different name
3. The lower-cased class itself
"""

import logging
import subprocess
from typing import Dict, Optional


logger = logging.getLogger(__name__)


LAUNCH_WRAPPER = "/usr/bin/env"

# Window classes whose executable has a different name
DEFAULT_CLASS_OVERRIDES: Dict[str, str] = {
    "google-chrome": "google-chrome-stable",
    "gnome-terminal": "gnome-terminal-server",
    "cursor-url-handler": "cursor",
}


def resolve_launch_command(
    window_class: str,
    overrides: Optional[Dict[str, str]] = None,
) -> str:
    """
    Resolve a launch command for a window class

    Args:
        window_class: Window class as reported by hyprctl
        overrides: Extra class -> executable mappings, checked before the
            built-in table (keys are matched lower-cased)

    Returns:
        Invocation such as "/usr/bin/env google-chrome-stable"
    """
    clean_class = window_class.lower().strip()

    table = dict(DEFAULT_CLASS_OVERRIDES)
    if overrides:
        table.update({key.lower().strip(): value for key, value in overrides.items()})

    executable = table.get(clean_class, clean_class)
    return f"{LAUNCH_WRAPPER} {executable}"


class ApplicationLauncher:
    """Spawns applications detached from the session manager.

    Spawns are fire-and-forget: the launcher returns as soon as the process
    exists and never waits for it to exit or map a window.
    """

    def spawn(self, command: str) -> bool:
        """
        Launch a command in its own session

        Args:
            command: Shell command line

        Returns:
            True if the process was spawned, False otherwise
        """
        try:
            subprocess.Popen(
                command,
                shell=True,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            logger.warning(f"Failed to launch '{command}': {e}")
            return False

        logger.info(f"Launched: {command}")
        return True
