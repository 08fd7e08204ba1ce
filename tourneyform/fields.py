"""Static field table for the registration form.

Each FieldDefinition pairs a field name with its label, required flag and the
JSON Schema fragment that expresses its rule. The validation engine builds its
schema from this table, so blur-time and submit-time validation share one
definition of every rule.

The registration type and terms fields are listed for completeness (they are
part of the snapshot) but carry no per-field rule; they are checked by the
form-level validators instead.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from tourneyform.types import FieldKind

PHONE_PATTERN = r"^\+?[0-9\s\-()]{10,15}$"
EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"

# Custom JSON Schema format registered by the validation engine.
BIRTHDATE_FORMAT = "birthdate"


@dataclass(frozen=True)
class FieldDefinition:
    """Definition of a single form field.

    Attributes:
        name: Field key used by the markup and the snapshot
        label: Human-readable label used in "is required" messages
        required: Whether an empty (after trim) value is an error
        kind: Input element kind
        rule: JSON Schema fragment applied to non-empty values
        message: Message shown when ``rule`` fails
        form_level: True for fields checked outside the per-field loop
    """
    name: str
    label: str
    required: bool = True
    kind: FieldKind = FieldKind.TEXT
    rule: Mapping[str, Any] = field(default_factory=dict)
    message: Optional[str] = None
    form_level: bool = False

    @property
    def required_message(self) -> str:
        return f"{self.label} is required."


FIELD_DEFINITIONS: List[FieldDefinition] = [
    FieldDefinition(
        name="fullName",
        label="Full Name",
        rule={"minLength": 2},
        message="Full name must be at least 2 characters long.",
    ),
    FieldDefinition(
        name="inGameName",
        label="In-Game Name",
        rule={"minLength": 2},
        message="In-game name must be at least 2 characters long.",
    ),
    FieldDefinition(
        name="freeFireUID",
        label="Free Fire UID",
        rule={"minLength": 8, "maxLength": 12},
        message="Free Fire UID must be between 8-12 digits.",
    ),
    FieldDefinition(
        name="whatsappNumber",
        label="WhatsApp Number",
        rule={"pattern": PHONE_PATTERN},
        message="Please enter a valid WhatsApp number.",
    ),
    FieldDefinition(
        name="email",
        label="Email",
        rule={"pattern": EMAIL_PATTERN},
        message="Please enter a valid email address.",
    ),
    FieldDefinition(
        name="dateOfBirth",
        label="Date of Birth",
        kind=FieldKind.DATE,
        rule={"format": BIRTHDATE_FORMAT},
        message="You must be at least {min_age} years old to participate.",
    ),
    FieldDefinition(name="province", label="Province", kind=FieldKind.SELECT),
    FieldDefinition(name="city", label="City/Village"),
    FieldDefinition(
        name="teamName",
        label="Team Name",
        rule={"minLength": 2},
        message="Team name must be at least 2 characters long.",
    ),
    FieldDefinition(
        name="registrationType",
        label="Registration Type",
        kind=FieldKind.RADIO,
        form_level=True,
    ),
    FieldDefinition(name="server", label="Server", kind=FieldKind.SELECT),
    FieldDefinition(name="referCode", label="Refer Code", required=False),
    FieldDefinition(
        name="acceptTerms",
        label="Terms & Conditions",
        kind=FieldKind.CHECKBOX,
        form_level=True,
    ),
]

FIELDS_BY_NAME: Dict[str, FieldDefinition] = {f.name: f for f in FIELD_DEFINITIONS}

FIELD_NAMES: List[str] = [f.name for f in FIELD_DEFINITIONS]


def get_field(name: str) -> Optional[FieldDefinition]:
    """Look up a field definition by name, or None for unknown names."""
    return FIELDS_BY_NAME.get(name)


def get_field_label(name: str) -> str:
    """Return the human-readable label for a field, falling back to its name.

    Examples:
        >>> get_field_label("city")
        'City/Village'
        >>> get_field_label("nickname")
        'nickname'
    """
    definition = FIELDS_BY_NAME.get(name)
    return definition.label if definition else name


__all__ = [
    "PHONE_PATTERN",
    "EMAIL_PATTERN",
    "BIRTHDATE_FORMAT",
    "FieldDefinition",
    "FIELD_DEFINITIONS",
    "FIELDS_BY_NAME",
    "FIELD_NAMES",
    "get_field",
    "get_field_label",
]
