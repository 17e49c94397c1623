from __future__ import annotations

from authprofiles.domain.reconciliation import OnceChangedNotifier
from tests.support.fakes import RecordingNotifier


def test_identical_consecutive_warnings_are_dropped() -> None:
    target = RecordingNotifier()
    notifier = OnceChangedNotifier(target)

    notifier.warn("first", "https://help")
    notifier.warn("first", "https://help")
    notifier.warn("first")
    notifier.warn("second")
    notifier.warn("first")

    assert target.warnings == [
        ("first", "https://help"),
        ("first", None),
        ("second", None),
        ("first", None),
    ]


def test_reset_allows_the_same_warning_again() -> None:
    target = RecordingNotifier()
    notifier = OnceChangedNotifier(target)

    notifier.warn("only")
    notifier.reset()
    notifier.warn("only")

    assert target.warnings == [("only", None), ("only", None)]
