"""
Host lifecycle hooks.

The registry belongs to the host side; bindings subscribe the mirror
engine to it.
"""

from .bindings import register_mirror_hooks
from .registry import ASSET_DELETED, ASSET_GENERATED, UPLOAD_DIR, HookRegistry

__all__ = [
    "ASSET_DELETED",
    "ASSET_GENERATED",
    "UPLOAD_DIR",
    "HookRegistry",
    "register_mirror_hooks",
]
