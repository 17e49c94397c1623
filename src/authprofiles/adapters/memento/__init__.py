"""Memento implementations for the profile store."""

from __future__ import annotations

from .memory import InMemoryMemento
from .sqlalchemy import SqlAlchemyMemento, create_memento_tables, memento_table

__all__ = ["InMemoryMemento", "SqlAlchemyMemento", "create_memento_tables", "memento_table"]
