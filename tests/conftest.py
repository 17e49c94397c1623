from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from authprofiles.adapters.memento import InMemoryMemento, SqlAlchemyMemento, create_memento_tables
from authprofiles.domain.store import ProfileStore
from tests.support.fakes import RecordingAuditSink, RecordingNotifier

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _isolated_environment(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path_factory: pytest.TempPathFactory,
) -> None:
    data_dir = tmp_path_factory.mktemp("authprofiles-data")
    monkeypatch.setenv("AUTHPROFILES_DATA_DIR", str(data_dir))
    for name in (
        "AUTHPROFILES_DATABASE_URI",
        "AUTHPROFILES_SSO_REGION",
        "AUTHPROFILES_HTTP_CACHE",
        "AUTHPROFILES_LOG_LEVEL",
        "AUTHPROFILES_SSO_TOKEN",
    ):
        monkeypatch.delenv(name, raising=False)
    logging.getLogger("authprofiles").setLevel(logging.DEBUG)


@pytest.fixture
def memento() -> InMemoryMemento:
    return InMemoryMemento()


@pytest.fixture
def audit_sink() -> RecordingAuditSink:
    return RecordingAuditSink()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def store(memento: InMemoryMemento, audit_sink: RecordingAuditSink) -> ProfileStore:
    return ProfileStore(memento, audit_sink)


@pytest.fixture
def sqlite_memento() -> Iterator[SqlAlchemyMemento]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    create_memento_tables(engine)
    memento = SqlAlchemyMemento(engine)
    try:
        yield memento
    finally:
        memento.dispose()
