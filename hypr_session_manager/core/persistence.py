"""
Session Persistence Module

Handles saving and loading session snapshots to/from disk.

Sessions are stored as JSON in:
    ~/.local/share/hyprland-session-manager/sessions/<name>.json
Generated window rules are written next to them as <name>.conf.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from .errors import SessionFileError
from .models import SessionData
from .rules import generate_rules


logger = logging.getLogger(__name__)


DEFAULT_SESSIONS_DIR = Path.home() / ".local/share/hyprland-session-manager/sessions"
DEFAULT_SESSION_NAME = "active"


def validate_session_name(name: str) -> None:
    """
    Check a session name is safe to use as a file stem

    Raises:
        SessionFileError: If the name is empty or has characters other than
            letters, digits, '-' and '_'
    """
    if not name or not name.replace("-", "").replace("_", "").isalnum():
        raise SessionFileError(f"Invalid session name: {name!r}")


class SessionStore:
    """
    Manages session snapshot files
    """

    def __init__(self, sessions_dir: Optional[Path] = None):
        """
        Initialize session store

        Args:
            sessions_dir: Directory for session files
                (default: ~/.local/share/hyprland-session-manager/sessions/)
        """
        self.sessions_dir = sessions_dir or DEFAULT_SESSIONS_DIR

    def session_path(self, name: str = DEFAULT_SESSION_NAME) -> Path:
        validate_session_name(name)
        return self.sessions_dir / f"{name}.json"

    def rules_path(self, name: str = DEFAULT_SESSION_NAME) -> Path:
        validate_session_name(name)
        return self.sessions_dir / f"{name}.conf"

    def save(self, session: SessionData, name: str = DEFAULT_SESSION_NAME) -> Path:
        """
        Save session snapshot to disk

        Args:
            session: Snapshot to save
            name: Session name

        Returns:
            Path to saved file

        Raises:
            SessionFileError: If the file cannot be written
        """
        filepath = self.session_path(name)
        data = session.model_dump(mode="json", by_alias=True)

        try:
            self.sessions_dir.mkdir(parents=True, exist_ok=True)
            with open(filepath, "w") as f:
                json.dump(data, f, indent=2)
                f.write("\n")
        except OSError as e:
            raise SessionFileError(f"Failed to write session {filepath}: {e}") from e

        logger.info(f"Saved session: {filepath} ({len(session.windows)} windows)")
        return filepath

    def load(self, name: str = DEFAULT_SESSION_NAME) -> Optional[SessionData]:
        """
        Load session snapshot from disk

        Args:
            name: Session name

        Returns:
            SessionData or None if no such session exists

        Raises:
            SessionFileError: If the file exists but cannot be parsed
        """
        filepath = self.session_path(name)

        if not filepath.exists():
            logger.warning(f"Session not found: {filepath}")
            return None

        try:
            with open(filepath, "r") as f:
                data = json.load(f)
            session = SessionData.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            raise SessionFileError(f"Failed to load session {filepath}: {e}") from e

        logger.debug(f"Loaded session: {filepath} ({len(session.windows)} windows)")
        return session

    def list_sessions(self) -> List[str]:
        """
        List saved session names

        Returns:
            Sorted session names
        """
        if not self.sessions_dir.exists():
            return []
        return sorted(path.stem for path in self.sessions_dir.glob("*.json"))

    def delete(self, name: str) -> bool:
        """
        Delete a saved session and its generated rules

        Args:
            name: Session name

        Returns:
            True if the session existed and was deleted
        """
        filepath = self.session_path(name)
        if not filepath.exists():
            logger.warning(f"Session not found: {filepath}")
            return False

        filepath.unlink()
        self.rules_path(name).unlink(missing_ok=True)

        logger.info(f"Deleted session: {name}")
        return True

    def write_rules(self, session: SessionData, name: str = DEFAULT_SESSION_NAME) -> Path:
        """
        Write static window rules for a session

        Args:
            session: Snapshot to derive rules from
            name: Session name

        Returns:
            Path to the rules file

        Raises:
            SessionFileError: If the file cannot be written
        """
        filepath = self.rules_path(name)

        try:
            self.sessions_dir.mkdir(parents=True, exist_ok=True)
            filepath.write_text(generate_rules(session))
        except OSError as e:
            raise SessionFileError(f"Failed to write rules {filepath}: {e}") from e

        logger.info(f"Wrote window rules: {filepath}")
        return filepath
