"""Tests for change detection and deduplication."""

from __future__ import annotations

from pathlib import Path

from camrelay.detector import ChangeDetector, Deduplicator
from camrelay.models.candidate import Candidate
from camrelay.models.enums import MediaKind, SelectionPolicy
from camrelay.models.notification import LastSeenState, Notification


def _candidate(path: str, mtime: float = 100.0) -> Candidate:
    return Candidate(path=Path(path), mtime=mtime)


class TestChangeDetector:
    """Tests for forward-only state transitions."""

    def test_no_prior_state_is_new(self) -> None:
        """First run treats any candidate as new."""
        for policy in SelectionPolicy:
            assert ChangeDetector(policy).is_newer(_candidate("/a/1.jpg"), None)

    def test_name_policy_requires_greater_path(self) -> None:
        """Name policy only moves forward to a greater path."""
        detector = ChangeDetector(SelectionPolicy.NAME)
        state = LastSeenState(last_path="/a/20230102/0005.jpg")

        assert detector.is_newer(_candidate("/a/20230102/0006.jpg"), state)
        assert detector.is_newer(_candidate("/a/20230103/0001.jpg"), state)
        assert not detector.is_newer(_candidate("/a/20230102/0005.jpg"), state)
        assert not detector.is_newer(_candidate("/a/20230101/0009.jpg"), state)

    def test_mtime_policy_requires_strictly_greater_mtime(self) -> None:
        """Mtime policy compares against the high-water mark."""
        detector = ChangeDetector(SelectionPolicy.MTIME)
        state = LastSeenState(last_path="/a/1.jpg", last_modified=100.0)

        assert detector.is_newer(_candidate("/a/0.jpg", mtime=100.5), state)
        assert not detector.is_newer(_candidate("/a/2.jpg", mtime=100.0), state)
        assert not detector.is_newer(_candidate("/a/2.jpg", mtime=99.0), state)


class TestNotificationMatching:
    """Tests for per-field notification equality."""

    def test_identical_notifications_match(self) -> None:
        a = Notification(camera_name="cam", jpg_path="/a/1.jpg")
        b = Notification(camera_name="cam", jpg_path="/a/1.jpg")

        assert a.matches(b)

    def test_unpopulated_fields_are_ignored(self) -> None:
        """Only fields populated on the new notification are compared."""
        # Given: A previous notification carrying both paths
        last = Notification(camera_name="cam", jpg_path="/a/1.jpg", mp4_path="/a/1.mp4")

        # When: The new one only carries the image path
        new = Notification(camera_name="cam", jpg_path="/a/1.jpg")

        # Then: It is a duplicate
        assert new.matches(last)

    def test_any_differing_field_is_not_a_match(self) -> None:
        last = Notification(camera_name="cam", jpg_path="/a/1.jpg")

        assert not Notification(camera_name="other", jpg_path="/a/1.jpg").matches(last)
        assert not Notification(camera_name="cam", jpg_path="/a/2.jpg").matches(last)
        assert not Notification(camera_name="cam", mp4_path="/a/1.mp4").matches(last)

    def test_nothing_matches_missing_previous(self) -> None:
        assert not Notification(camera_name="cam", jpg_path="/a/1.jpg").matches(None)

    def test_wire_format_uses_camel_case_keys(self) -> None:
        """Wire payload always carries all three keys."""
        notification = Notification.for_file("front_door", MediaKind.IMAGE, "/a/1.jpg")

        assert notification.to_wire() == {
            "cameraName": "front_door",
            "jpgPath": "/a/1.jpg",
            "mp4Path": None,
        }

    def test_for_file_populates_video_path(self) -> None:
        notification = Notification.for_file("front_door", MediaKind.VIDEO, "/a/1.mp4")

        assert notification.jpg_path is None
        assert notification.mp4_path == "/a/1.mp4"


class TestDeduplicator:
    """Tests for the deduplicator."""

    def test_first_notification_is_not_duplicate(self) -> None:
        dedup = Deduplicator()

        assert not dedup.is_duplicate(Notification(camera_name="cam", jpg_path="/a/1.jpg"))

    def test_remembered_notification_is_duplicate(self) -> None:
        """Re-observing the same latest file is suppressed."""
        # Given: A delivered notification
        dedup = Deduplicator()
        first = Notification(camera_name="cam", jpg_path="/a/1.jpg")
        dedup.remember(first)

        # When/Then: The same one is a duplicate and a new file is not
        assert dedup.is_duplicate(Notification(camera_name="cam", jpg_path="/a/1.jpg"))
        assert not dedup.is_duplicate(Notification(camera_name="cam", jpg_path="/a/2.jpg"))
        assert dedup.last == first
