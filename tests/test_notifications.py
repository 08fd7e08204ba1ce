"""Unit tests for the notification presenter.

Tests cover:
- Error notice expiry after the configured delay
- Overlapping error notices
- Success acknowledgment lifetime
"""

from datetime import timedelta

from tourneyform.notifications import SUCCESS_MESSAGE, NotificationPresenter
from tourneyform.types import NoticeKind

from tests.conftest import FIXED_NOW


class TestErrorNotices:
    """Test auto-dismissing error notices."""

    def test_error_visible_until_delay_passes(self, clock):
        """Should hide an error notice exactly 5 seconds after it was shown."""
        presenter = NotificationPresenter(clock=clock)
        notice = presenter.show_error("Please fix all errors before submitting.")

        assert notice.kind == NoticeKind.ERROR
        assert notice.expires_at == FIXED_NOW + timedelta(seconds=5)

        clock.now = FIXED_NOW + timedelta(milliseconds=4999)
        assert presenter.visible_errors() == [notice]

        clock.now = FIXED_NOW + timedelta(seconds=5)
        assert presenter.visible_errors() == []

    def test_overlapping_errors_are_not_deduplicated(self, clock):
        """Should show a second identical notice next to the first."""
        presenter = NotificationPresenter(clock=clock)
        first = presenter.show_error("Please fix all errors before submitting.")
        clock.now = FIXED_NOW + timedelta(seconds=3)
        second = presenter.show_error("Please fix all errors before submitting.")

        assert presenter.visible_errors() == [first, second]

        clock.now = FIXED_NOW + timedelta(seconds=6)
        assert presenter.visible_errors() == [second]

    def test_expire_returns_dropped_notices(self, clock):
        """Should report which notices expired."""
        presenter = NotificationPresenter(error_ttl_ms=1000, clock=clock)
        notice = presenter.show_error("boom")

        assert presenter.expire() == []
        clock.now = FIXED_NOW + timedelta(seconds=1)
        assert presenter.expire() == [notice]
        assert presenter.expire() == []

    def test_notice_ids_increase(self, clock):
        """Should number notices sequentially."""
        presenter = NotificationPresenter(clock=clock)

        ids = [presenter.show_error("a").notice_id, presenter.show_success().notice_id]
        assert ids == [1, 2]


class TestSuccessNotice:
    """Test the sticky success acknowledgment."""

    def test_success_stays_until_dismissed(self, clock):
        """Should not expire with time."""
        presenter = NotificationPresenter(clock=clock)
        notice = presenter.show_success()

        clock.now = FIXED_NOW + timedelta(days=1)
        assert presenter.success_visible is True
        assert presenter.success == notice
        assert notice.message == SUCCESS_MESSAGE
        assert notice.expires_at is None

        assert presenter.dismiss_success() == notice
        assert presenter.success_visible is False

    def test_dismiss_without_success_is_noop(self, clock):
        """Should return None when nothing is shown."""
        assert NotificationPresenter(clock=clock).dismiss_success() is None

    def test_to_dict(self, clock):
        """Should omit expiresAt for success notices."""
        presenter = NotificationPresenter(clock=clock)

        assert "expiresAt" not in presenter.show_success().to_dict()
        assert presenter.show_error("x").to_dict()["kind"] == "error"
