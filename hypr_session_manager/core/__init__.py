"""
Core session capture and restore logic.

Leaf first: models -> hyprctl gateway -> snapshot reader -> restorer,
plus static rule generation, persistence and configuration.
"""

from .errors import (
    SessionManagerError,
    GatewayError,
    CaptureError,
    SessionFileError,
    ConfigError,
)
from .models import (
    Workspace,
    Window,
    SessionData,
    CmdlineLookup,
    Directive,
    DirectiveType,
    DirectiveBatch,
    BATCH_SEPARATOR,
)
from .hyprctl import CommandGateway, HyprctlGateway, dispatch, dispatch_batch
from .process_table import read_cmdline
from .snapshot import SessionSnapshotReader, capture_session
from .launch import ApplicationLauncher, resolve_launch_command
from .restore import (
    RestoreReport,
    SessionRestorer,
    build_directives,
    group_by_class,
    pair_windows,
    restore_session,
)
from .rules import generate_rules
from .persistence import SessionStore
from .config import SessionManagerConfig, load_config, ensure_source_line

__all__ = [
    # Errors
    "SessionManagerError",
    "GatewayError",
    "CaptureError",
    "SessionFileError",
    "ConfigError",

    # Models
    "Workspace",
    "Window",
    "SessionData",
    "CmdlineLookup",
    "Directive",
    "DirectiveType",
    "DirectiveBatch",
    "BATCH_SEPARATOR",

    # Gateway
    "CommandGateway",
    "HyprctlGateway",
    "dispatch",
    "dispatch_batch",

    # Capture
    "read_cmdline",
    "SessionSnapshotReader",
    "capture_session",

    # Launch
    "ApplicationLauncher",
    "resolve_launch_command",

    # Restore
    "RestoreReport",
    "SessionRestorer",
    "build_directives",
    "group_by_class",
    "pair_windows",
    "restore_session",

    # Rules, persistence, config
    "generate_rules",
    "SessionStore",
    "SessionManagerConfig",
    "load_config",
    "ensure_source_line",
]
