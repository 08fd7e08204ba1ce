"""Core type definitions for the tournament registration form.

This module defines the fundamental types used throughout tourneyform:
- FieldErrorCode: Validation error codes for individual fields and groups
- FieldKind: The kind of input element a field is rendered as
- EventType: Audit event types emitted along the submission pipeline
- NoticeKind: Transient notification categories

These types form the contract between a UI binding layer and the runtime.
"""

from enum import Enum


class FieldErrorCode(str, Enum):
    """Validation error codes for individual field failures.

    Every failure the form can produce maps to exactly one code:
    missing values, length out of range, pattern mismatches, the minimum
    age rule, and the two form-level checks.
    """
    REQUIRED = "required"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    INVALID_FORMAT = "invalid_format"
    UNDERAGE = "underage"
    MISSING_SELECTION = "missing_selection"
    MISSING_CONSENT = "missing_consent"


class FieldKind(str, Enum):
    """Input element kinds supplied by the form markup."""
    TEXT = "text"
    DATE = "date"
    SELECT = "select"
    RADIO = "radio"
    CHECKBOX = "checkbox"


class EventType(str, Enum):
    """Audit event types for the registration pipeline.

    Each step of collect -> validate -> compose -> dispatch emits a typed event.
    """
    FIELD_VALIDATED = "field.validated"
    FIELD_CLEARED = "field.cleared"
    VALIDATION_PASSED = "validation.passed"
    VALIDATION_FAILED = "validation.failed"
    MESSAGE_COMPOSED = "message.composed"
    LINK_DISPATCHED = "link.dispatched"
    NOTICE_SHOWN = "notice.shown"
    NOTICE_DISMISSED = "notice.dismissed"
    FORM_RESET = "form.reset"


class NoticeKind(str, Enum):
    """Notification categories.

    Error notices auto-dismiss; the success acknowledgment stays until the
    user closes it.
    """
    ERROR = "error"
    SUCCESS = "success"


__all__ = [
    "FieldErrorCode",
    "FieldKind",
    "EventType",
    "NoticeKind",
]
