"""RegistrationRuntime orchestrator for the tournament registration form.

This module provides the RegistrationRuntime class that coordinates form
state, the validation engine, message composition, link dispatch and user
notifications. A UI binding layer forwards three kinds of trigger to it:

- ``on_field_input``: a field's value changed (clears its message)
- ``on_field_blur``: a field lost focus (validates that field)
- ``submit``: the form was submitted (validate -> compose -> dispatch)
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import timezone
from typing import Any, Dict, List, Optional

from tourneyform.composer import RegistrationMessage, compose_message
from tourneyform.config import RegistrationConfig
from tourneyform.dispatch import BrowserLinkOpener, LinkOpener, build_destination_link, dispatch_link
from tourneyform.errors import FormError
from tourneyform.events import EventEmitter, RegistrationEvent
from tourneyform.form_state import FormSnapshot, FormState
from tourneyform.notifications import Notice, NotificationPresenter
from tourneyform.types import EventType
from tourneyform.validation import (
    Clock,
    FieldValidation,
    FormValidationResult,
    ValidationEngine,
    local_now,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionOutcome:
    """Result of a submit attempt.

    Attributes:
        ok: Whether the form was valid and the message was dispatched
        snapshot: Values captured when the form was submitted
        error: Error envelope when the submission was blocked
        message: The composed message when the submission went through
        link: The destination link that was handed to the opener
        opened: What the opener reported (informational only)
    """
    ok: bool
    snapshot: FormSnapshot
    error: Optional[FormError] = None
    message: Optional[RegistrationMessage] = None
    link: Optional[str] = None
    opened: Optional[bool] = None

    @property
    def registration_id(self) -> Optional[int]:
        return self.message.registration_id if self.message else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        if self.error is not None:
            return self.error.to_dict()
        result: Dict[str, Any] = {"ok": self.ok}
        if self.message is not None:
            result["registrationId"] = self.message.registration_id
            result["message"] = self.message.text
        if self.link is not None:
            result["link"] = self.link
        return result


class RegistrationRuntime:
    """Orchestrator for the registration form.

    Every environment interaction is injected: the form state, the link
    opener and the clock. The runtime itself holds no other mutable state
    than the notices it presents and its event history.

    Attributes:
        config: Deployment settings
        form: Current form values and attached field messages
        engine: Validation engine shared by blur and submit
        notifier: Visible notices
        emitter: Event emitter for binding layers

    Examples:
        >>> runtime = RegistrationRuntime()
        >>> runtime.on_field_input("teamName", "X")
        >>> runtime.on_field_blur("teamName").message
        'Team name must be at least 2 characters long.'
        >>> runtime.form.error_for("teamName")
        'Team name must be at least 2 characters long.'
    """

    def __init__(
        self,
        config: Optional[RegistrationConfig] = None,
        form: Optional[FormState] = None,
        opener: Optional[LinkOpener] = None,
        clock: Optional[Clock] = None,
        emitter: Optional[EventEmitter] = None,
    ):
        self.config = config or RegistrationConfig()
        self.form = form or FormState()
        self.opener = opener or BrowserLinkOpener()
        self._clock = clock or local_now
        self.engine = ValidationEngine(
            min_age=self.config.min_age,
            registration_types=self.config.registration_types,
            clock=self._clock,
        )
        self.notifier = NotificationPresenter(self.config.error_notice_ttl_ms, clock=self._clock)
        self.emitter = emitter or EventEmitter()
        self._events: List[RegistrationEvent] = []

    def on_field_input(self, name: str, value: Any) -> None:
        """Store a new value for a field and clear its message.

        Raises:
            ValueError: If ``name`` is not a defined field
        """
        self.form.set_value(name, value)
        self.form.clear_error(name)
        self._emit(EventType.FIELD_CLEARED, {"field": name})

    def on_field_blur(self, name: str) -> FieldValidation:
        """Validate one field's current value and attach or clear its message."""
        outcome = self.engine.validate_field(name, self.form.get_value(name))
        self._apply(outcome)
        payload: Dict[str, Any] = {"field": name, "isValid": outcome.is_valid}
        if outcome.error is not None:
            payload["code"] = outcome.error.code.value
        self._emit(EventType.FIELD_VALIDATED, payload)
        return outcome

    def validate(self) -> FormValidationResult:
        """Run every field rule and both form-level checks on the current values.

        Messages are attached to failing fields and cleared from passing ones.
        """
        result = self.engine.validate_form(self.form.snapshot())
        failed = {e.path: e for e in result.errors}
        for name in result.data or {}:
            error = failed.get(name)
            self._apply(FieldValidation(field=name, is_valid=error is None, error=error))
        return result

    def submit(self) -> SubmissionOutcome:
        """Validate, compose and dispatch the registration.

        On failure a single generic error notice is shown and the individual
        messages stay attached to their fields. On success the destination
        link is handed to the opener without waiting on it, the success
        acknowledgment is shown and the form is reset.
        """
        snapshot = self.form.snapshot()
        result = self.validate()

        if not result.is_valid:
            form_error = FormError(fields=result.errors)
            self._emit(
                EventType.VALIDATION_FAILED,
                {
                    "missingFields": result.missing_fields,
                    "invalidFields": result.invalid_fields,
                },
            )
            self._show_error(form_error.message)
            logger.debug("Submission blocked by %d field error(s)", len(result.errors))
            return SubmissionOutcome(ok=False, snapshot=snapshot, error=form_error)

        self._emit(EventType.VALIDATION_PASSED)

        message = compose_message(snapshot, now=self._clock(), config=self.config)
        self._emit(EventType.MESSAGE_COMPOSED, {"registrationId": message.registration_id})

        link = build_destination_link(message.text, self.config)
        opened = dispatch_link(link, self.opener)
        self._emit(
            EventType.LINK_DISPATCHED,
            {"registrationId": message.registration_id, "host": self.config.messaging_host},
        )

        notice = self.notifier.show_success()
        self._emit(EventType.NOTICE_SHOWN, notice.to_dict())

        self.form.reset()
        self._emit(EventType.FORM_RESET)

        logger.info("Registration %s dispatched", message.registration_id)
        return SubmissionOutcome(
            ok=True,
            snapshot=snapshot,
            message=message,
            link=link,
            opened=opened,
        )

    def close_success(self) -> None:
        """Dismiss the success acknowledgment."""
        notice = self.notifier.dismiss_success()
        if notice is not None:
            self._emit(EventType.NOTICE_DISMISSED, notice.to_dict())

    def visible_notices(self) -> List[Notice]:
        """Return visible notices, dropping error notices whose delay has passed."""
        for notice in self.notifier.expire():
            self._emit(EventType.NOTICE_DISMISSED, notice.to_dict())
        notices = self.notifier.visible_errors()
        if self.notifier.success is not None:
            notices.append(self.notifier.success)
        return notices

    def get_events(self) -> List[RegistrationEvent]:
        """Events emitted by this runtime, in chronological order."""
        return list(self._events)

    def _show_error(self, message: str) -> None:
        notice = self.notifier.show_error(message)
        self._emit(EventType.NOTICE_SHOWN, notice.to_dict())

    def _apply(self, outcome: FieldValidation) -> None:
        if outcome.is_valid:
            self.form.clear_error(outcome.field)
        else:
            self.form.set_error(outcome.field, outcome.message)

    def _emit(self, event_type: EventType, payload: Optional[Dict[str, Any]] = None) -> None:
        event = RegistrationEvent(
            event_id=f"evt_{uuid.uuid4().hex[:16]}",
            type=event_type,
            ts=self._clock().astimezone(timezone.utc),
            payload=payload,
        )
        self._events.append(event)
        self.emitter.emit(event)


__all__ = [
    "RegistrationRuntime",
    "SubmissionOutcome",
]
