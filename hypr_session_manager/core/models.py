"""
Data models for Hyprland session capture and restore.

All models use Pydantic v2 for validation and serialization. Window records
are parsed straight from `hyprctl clients -j` output; fields hyprctl reports
that the session manager does not use (monitor, pinned, fullscreen, ...) are
ignored.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


# Separator between directives in a `hyprctl --batch` argument
BATCH_SEPARATOR = " ; "


# ============================================================================
# Window snapshot
# ============================================================================

class Workspace(BaseModel):
    """Virtual desktop a window occupies"""
    id: Optional[int] = None
    name: str = ""

    model_config = {"frozen": True}


class Window(BaseModel):
    """A live or saved Hyprland client.

    `address` is only meaningful while the window exists; relaunching an
    application always yields a new address. `window_class` is the sole
    correlation key between saved and relaunched windows and is not unique.
    """
    address: str
    workspace: Workspace
    at: tuple[int, int]
    size: tuple[int, int]
    window_class: str = Field(alias="class")
    title: str = ""
    floating: bool = False
    pid: int
    cmdline: str = ""

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "extra": "ignore",
    }


class SessionData(BaseModel):
    """Ordered, immutable capture of all windows at one instant"""
    windows: list[Window] = Field(default_factory=list)
    captured_at: Optional[datetime] = None

    model_config = {"frozen": True}

    @property
    def is_empty(self) -> bool:
        return not self.windows


class CmdlineLookup(BaseModel):
    """Outcome of reading one process's launch command.

    Either `cmdline` holds the recovered invocation and `error` is None, or
    `cmdline` is empty and `error` says why the lookup failed.
    """
    pid: int
    cmdline: str = ""
    error: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def ok(self) -> bool:
        return self.error is None


# ============================================================================
# Dispatch directives
# ============================================================================

class DirectiveType(str, Enum):
    """hyprctl dispatchers used during restore"""
    CLOSE = "close"
    MOVE_TO_WORKSPACE = "move_to_workspace"
    TOGGLE_FLOATING = "toggle_floating"
    MOVE_PIXEL = "move_pixel"
    RESIZE_PIXEL = "resize_pixel"


class Directive(BaseModel):
    """Single hyprctl dispatch addressed to one window.

    Example:
        >>> d = Directive(
        ...     address="0x55d1c0a3e2b0",
        ...     directive_type=DirectiveType.MOVE_PIXEL,
        ...     params={"x": 10, "y": 40},
        ... )
        >>> d.to_hyprctl()
        'dispatch movewindowpixel exact 10 40,address:0x55d1c0a3e2b0'
    """

    address: str = Field(..., min_length=1)
    directive_type: DirectiveType
    params: dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}

    def to_hyprctl(self) -> str:
        """Render the directive as a hyprctl command string.

        Raises:
            ValueError: If a parameter the dispatcher needs is missing
        """
        selector = f"address:{self.address}"

        match self.directive_type:
            case DirectiveType.CLOSE:
                return f"dispatch closewindow {selector}"

            case DirectiveType.MOVE_TO_WORKSPACE:
                if "workspace_id" not in self.params:
                    raise ValueError("MOVE_TO_WORKSPACE requires 'workspace_id' parameter")
                return f"dispatch movetoworkspace {self.params['workspace_id']},{selector}"

            case DirectiveType.TOGGLE_FLOATING:
                return f"dispatch togglefloating {selector}"

            case DirectiveType.MOVE_PIXEL:
                if "x" not in self.params or "y" not in self.params:
                    raise ValueError("MOVE_PIXEL requires 'x' and 'y' parameters")
                return (
                    f"dispatch movewindowpixel exact "
                    f"{self.params['x']} {self.params['y']},{selector}"
                )

            case DirectiveType.RESIZE_PIXEL:
                if "width" not in self.params or "height" not in self.params:
                    raise ValueError("RESIZE_PIXEL requires 'width' and 'height' parameters")
                return (
                    f"dispatch resizewindowpixel exact "
                    f"{self.params['width']} {self.params['height']},{selector}"
                )

        raise ValueError(f"Unsupported directive type: {self.directive_type}")


class DirectiveBatch(BaseModel):
    """Directives sent to the compositor in a single `--batch` call"""

    directives: list[Directive] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.directives)

    def to_batch_argument(self) -> str:
        """Join all directives with the batch separator."""
        return BATCH_SEPARATOR.join(d.to_hyprctl() for d in self.directives)
