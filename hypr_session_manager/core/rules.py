"""Static window rule generation.

Turns a snapshot into Hyprland `windowrule` lines so the compositor's own
config loader can place windows on startup. Rules match any window of a
class, so no pairing is involved.
"""

from .models import SessionData


RULES_HEADER = "# Generated by Hyprland Session Manager\n\n"


def class_pattern(window_class: str) -> str:
    """Anchored pattern matching exactly one window class."""
    return f"^{window_class}$"


def generate_rules(saved: SessionData) -> str:
    """Render move, size and workspace rules for every saved window.

    Args:
        saved: Snapshot to derive rules from

    Returns:
        Rules text, starting with a header comment
    """
    rules = RULES_HEADER

    for window in saved.windows:
        pattern = class_pattern(window.window_class)
        rules += f"windowrule = move {window.at[0]} {window.at[1]},{pattern}\n"
        rules += f"windowrule = size {window.size[0]} {window.size[1]},{pattern}\n"
        rules += f"windowrule = workspace {window.workspace.name},{pattern}\n\n"

    return rules
