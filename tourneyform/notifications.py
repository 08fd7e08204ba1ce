"""Transient user feedback for the registration form.

Two kinds of notice exist. Error notices expire a fixed delay after they are
shown; the expiry cannot be cancelled, and a new error notice is added next to
any that are still visible. The success acknowledgment stays visible until the
user dismisses it.
"""

import itertools
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from tourneyform.config import DEFAULT_ERROR_NOTICE_TTL_MS
from tourneyform.types import NoticeKind
from tourneyform.validation import Clock, local_now

SUCCESS_MESSAGE = "Registration submitted successfully!"


@dataclass(frozen=True)
class Notice:
    """A notice shown to the user.

    Attributes:
        notice_id: Sequential id, unique per presenter
        kind: Error or success
        message: Text shown to the user
        shown_at: When the notice appeared
        expires_at: When an error notice disappears (None for success)
    """
    notice_id: int
    kind: NoticeKind
    message: str
    shown_at: datetime
    expires_at: Optional[datetime] = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and now >= self.expires_at

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        result: Dict[str, Any] = {
            "noticeId": self.notice_id,
            "kind": self.kind.value,
            "message": self.message,
            "shownAt": self.shown_at.isoformat(),
        }
        if self.expires_at is not None:
            result["expiresAt"] = self.expires_at.isoformat()
        return result


class NotificationPresenter:
    """Holds the notices currently visible.

    Time comes from the injected clock, so expiry is evaluated whenever the
    visible notices are read rather than by a background timer.

    Examples:
        >>> presenter = NotificationPresenter()
        >>> notice = presenter.show_error("Please fix all errors before submitting.")
        >>> [n.message for n in presenter.visible_errors()]
        ['Please fix all errors before submitting.']
    """

    def __init__(self, error_ttl_ms: int = DEFAULT_ERROR_NOTICE_TTL_MS, clock: Optional[Clock] = None):
        self.error_ttl = timedelta(milliseconds=error_ttl_ms)
        self._clock = clock or local_now
        self._ids = itertools.count(1)
        self._errors: List[Notice] = []
        self._success: Optional[Notice] = None

    def show_error(self, message: str) -> Notice:
        """Show an error notice that expires after the configured delay."""
        now = self._clock()
        notice = Notice(
            notice_id=next(self._ids),
            kind=NoticeKind.ERROR,
            message=message,
            shown_at=now,
            expires_at=now + self.error_ttl,
        )
        self._errors.append(notice)
        return notice

    def show_success(self, message: str = SUCCESS_MESSAGE) -> Notice:
        """Show the success acknowledgment, replacing any one already shown."""
        self._success = Notice(
            notice_id=next(self._ids),
            kind=NoticeKind.SUCCESS,
            message=message,
            shown_at=self._clock(),
        )
        return self._success

    def dismiss_success(self) -> Optional[Notice]:
        """Hide the success acknowledgment. Returns the notice that was hidden."""
        dismissed, self._success = self._success, None
        return dismissed

    def expire(self) -> List[Notice]:
        """Drop expired error notices and return them."""
        now = self._clock()
        expired = [n for n in self._errors if n.is_expired(now)]
        self._errors = [n for n in self._errors if not n.is_expired(now)]
        return expired

    def visible_errors(self) -> List[Notice]:
        self.expire()
        return list(self._errors)

    @property
    def success(self) -> Optional[Notice]:
        return self._success

    @property
    def success_visible(self) -> bool:
        return self._success is not None


__all__ = [
    "SUCCESS_MESSAGE",
    "Notice",
    "NotificationPresenter",
]
