"""Form state for the registration form.

FormState is the in-memory stand-in for the form markup: it holds the current
raw value of every field and the message currently attached to each field.
FormSnapshot is the immutable copy of those values taken at submission time.

Usage:
    >>> state = FormState()
    >>> state.set_value("fullName", "Aarav")
    >>> snapshot = state.snapshot()
    >>> snapshot["fullName"]
    'Aarav'
    >>> snapshot["referCode"]
    ''
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, Optional

from tourneyform.fields import FIELD_NAMES, FIELDS_BY_NAME, get_field
from tourneyform.types import FieldKind

CHECKED_VALUE = "on"


def normalize_value(value: Any) -> str:
    """Coerce an input value to the raw string the form would hold.

    Checkbox state may be passed as a bool; it is stored the way an HTML
    form encodes it ("on" when checked, "" otherwise).
    """
    if value is None or value is False:
        return ""
    if value is True:
        return CHECKED_VALUE
    return str(value)


@dataclass(frozen=True)
class FormSnapshot:
    """Immutable mapping of field name to raw string value.

    Contains an entry for every defined field; fields missing from the
    source mapping default to "".

    Examples:
        >>> snap = FormSnapshot.from_mapping({"fullName": "Aarav", "acceptTerms": True})
        >>> snap["acceptTerms"]
        'on'
        >>> "server" in snap
        True
    """
    values: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FormSnapshot":
        """Build a snapshot from any mapping of field values."""
        values: Dict[str, str] = {name: "" for name in FIELD_NAMES}
        for key, value in data.items():
            values[key] = normalize_value(value)
        return cls(values=values)

    def __getitem__(self, name: str) -> str:
        return self.values[name]

    def __contains__(self, name: object) -> bool:
        return name in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def get(self, name: str, default: str = "") -> str:
        return self.values.get(name, default)

    def to_dict(self) -> Dict[str, str]:
        """Convert to dict for serialization."""
        return dict(self.values)


class FormState:
    """Mutable current state of the form.

    Tracks the raw value of every field and the validation message attached
    to each field. Values for unknown field names are rejected so a typo in a
    binding layer surfaces immediately instead of silently dropping input.

    Attributes:
        defaults: Values restored by ``reset()``
    """

    def __init__(self, defaults: Optional[Mapping[str, Any]] = None):
        self.defaults: Dict[str, str] = {name: "" for name in FIELD_NAMES}
        for key, value in (defaults or {}).items():
            self._check_name(key)
            self.defaults[key] = normalize_value(value)
        self._values: Dict[str, str] = dict(self.defaults)
        self._errors: Dict[str, str] = {}

    @staticmethod
    def _check_name(name: str) -> None:
        if name not in FIELDS_BY_NAME:
            raise ValueError(f"Unknown form field '{name}'")

    def set_value(self, name: str, value: Any) -> None:
        """Store the raw value of a field.

        Raises:
            ValueError: If ``name`` is not a defined field
        """
        self._check_name(name)
        self._values[name] = normalize_value(value)

    def update(self, values: Mapping[str, Any]) -> None:
        """Store several field values at once."""
        for name, value in values.items():
            self.set_value(name, value)

    def get_value(self, name: str) -> str:
        return self._values.get(name, "")

    def is_checked(self, name: str) -> bool:
        """Return True if a checkbox field is currently checked."""
        definition = get_field(name)
        if definition is None or definition.kind != FieldKind.CHECKBOX:
            return False
        return self._values.get(name, "") != ""

    def set_error(self, name: str, message: str) -> None:
        self._errors[name] = message

    def clear_error(self, name: str) -> None:
        self._errors.pop(name, None)

    def error_for(self, name: str) -> str:
        """Return the message attached to a field ("" if none)."""
        return self._errors.get(name, "")

    @property
    def errors(self) -> Dict[str, str]:
        """Copy of all attached messages, keyed by field name."""
        return dict(self._errors)

    def snapshot(self) -> FormSnapshot:
        """Capture the current values as an immutable FormSnapshot."""
        return FormSnapshot.from_mapping(self._values)

    def reset(self) -> None:
        """Restore every field to its default and clear attached messages."""
        self._values = dict(self.defaults)
        self._errors.clear()


__all__ = [
    "CHECKED_VALUE",
    "normalize_value",
    "FormSnapshot",
    "FormState",
]
