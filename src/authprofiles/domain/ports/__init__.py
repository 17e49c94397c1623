"""Domain port definitions for adapters."""

from __future__ import annotations

from .audit import AuditAction, AuditEvent, AuditResult, AuditSink
from .credentials import CredentialProviderDescriptor, CredentialsProviderManager
from .federation import AccountInfo, FederationClient, FederationError, RoleInfo
from .notify import Notifier
from .persistence import JsonValue, Memento

__all__ = [
    "AccountInfo",
    "AuditAction",
    "AuditEvent",
    "AuditResult",
    "AuditSink",
    "CredentialProviderDescriptor",
    "CredentialsProviderManager",
    "FederationClient",
    "FederationError",
    "JsonValue",
    "Memento",
    "Notifier",
    "RoleInfo",
]
