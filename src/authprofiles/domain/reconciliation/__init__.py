"""Reconciliation of stored profiles against external sources."""

from __future__ import annotations

from .linked import PERMISSION_SETS_HELP_URL, load_linked_profiles
from .notify import OnceChangedNotifier
from .unmanaged import UnmanagedSyncResult, load_unmanaged_profiles

__all__ = [
    "PERMISSION_SETS_HELP_URL",
    "OnceChangedNotifier",
    "UnmanagedSyncResult",
    "load_linked_profiles",
    "load_unmanaged_profiles",
]
