"""Hyprland Session Manager - save and restore Hyprland window layouts.

This package provides:
- Session capture (windows, workspaces, geometry, launch commands)
- Session restore with class-based window correlation and batched placement
- Static window rule generation for declarative restore
- A command-line interface (`hsm`)
"""

__version__ = "0.1.0"
__license__ = "MIT"

__all__ = ["__version__", "__license__"]
