"""JSON Schema validation engine for the registration form.

This module provides a ValidationEngine that validates field values against a
Draft 7 JSON Schema built from the static field table, and translates the
resulting jsonschema errors into FieldError values carrying the form's own
messages.

The same engine serves both triggers: ``validate_field`` is called when a
single input loses focus, and ``validate_form`` runs every field rule plus the
two form-level checks (registration type selection and terms acceptance) when
the form is submitted.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import jsonschema
from dateutil import parser as date_parser
from jsonschema import Draft7Validator, FormatChecker

from tourneyform.errors import FieldError
from tourneyform.fields import BIRTHDATE_FORMAT, FIELD_DEFINITIONS, FieldDefinition
from tourneyform.types import FieldErrorCode

logger = logging.getLogger(__name__)

DEFAULT_MIN_AGE = 13

REGISTRATION_TYPE_MESSAGE = "Please select a registration type."
TERMS_MESSAGE = "You must accept the terms and conditions."

Clock = Callable[[], datetime]

# Codes that mean "nothing was provided" rather than "something wrong was provided"
MISSING_CODES = (
    FieldErrorCode.REQUIRED,
    FieldErrorCode.MISSING_SELECTION,
    FieldErrorCode.MISSING_CONSENT,
)


def local_now() -> datetime:
    """Current local time as a timezone-aware datetime."""
    return datetime.now().astimezone()


def parse_birthdate(value: str) -> Optional[date]:
    """Parse a date-of-birth value into a date.

    ISO dates (what a date input submits) are parsed strictly; anything else
    goes through dateutil's general parser, month first.

    Returns:
        The parsed date, or None if the value is not a date
    """
    try:
        return date_parser.isoparse(value).date()
    except ValueError:
        pass
    try:
        return date_parser.parse(value).date()
    except (ValueError, OverflowError):
        return None


def age_on(birthdate: date, today: date) -> int:
    """Whole years between ``birthdate`` and ``today``.

    The year difference is reduced by one when today's month/day falls before
    the birth month/day.

    Examples:
        >>> age_on(date(2010, 6, 15), date(2023, 6, 15))
        13
        >>> age_on(date(2010, 6, 15), date(2023, 6, 14))
        12
    """
    age = today.year - birthdate.year
    if (today.month, today.day) < (birthdate.month, birthdate.day):
        age -= 1
    return age


def build_form_schema(definitions: Sequence[FieldDefinition] = FIELD_DEFINITIONS) -> Dict[str, Any]:
    """Build the Draft 7 schema for all fields checked in the per-field loop.

    Values are validated after trimming, with empty values omitted, so the
    "required" keyword expresses the non-empty rule and the per-field
    keywords only ever see non-empty strings.
    """
    properties: Dict[str, Any] = {}
    required: List[str] = []
    for definition in definitions:
        if definition.form_level:
            continue
        properties[definition.name] = {"type": "string", **definition.rule}
        if definition.required:
            required.append(definition.name)
    return {
        "type": "object",
        "properties": properties,
        "required": required,
    }


@dataclass(frozen=True)
class FieldValidation:
    """Outcome of validating a single field.

    Attributes:
        field: Field name
        is_valid: Whether the value passed
        error: The failure details (None if valid)
    """
    field: str
    is_valid: bool
    error: Optional[FieldError] = None

    @property
    def message(self) -> str:
        """Message to attach to the field ("" when valid)."""
        return self.error.message if self.error else ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        result: Dict[str, Any] = {"field": self.field, "isValid": self.is_valid}
        if self.error is not None:
            result["error"] = self.error.to_dict()
        return result


@dataclass(frozen=True)
class FormValidationResult:
    """Result of validating a whole form.

    Attributes:
        is_valid: True only if every field and both form-level checks passed
        errors: Field-level errors in form order (empty if valid)
        data: The values that were validated
        missing_fields: Fields that failed because nothing was provided
        invalid_fields: Fields that failed a length, pattern or age rule
    """
    is_valid: bool
    errors: List[FieldError]
    data: Optional[Dict[str, Any]] = None
    missing_fields: Optional[List[str]] = None
    invalid_fields: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        result: Dict[str, Any] = {
            "isValid": self.is_valid,
            "errors": [e.to_dict() for e in self.errors],
        }
        if self.data is not None:
            result["data"] = self.data
        if self.missing_fields is not None:
            result["missingFields"] = self.missing_fields
        if self.invalid_fields is not None:
            result["invalidFields"] = self.invalid_fields
        return result


def validate_registration_type(value: Any, options: Sequence[str] = ()) -> FieldValidation:
    """Check that a registration type was selected.

    Args:
        value: The selected option ("" or None when nothing is selected)
        options: Allowed options; when empty any non-empty selection passes

    Examples:
        >>> validate_registration_type("Solo").is_valid
        True
        >>> validate_registration_type("").message
        'Please select a registration type.'
    """
    selected = str(value).strip() if value is not None else ""
    if selected and (not options or selected in options):
        return FieldValidation(field="registrationType", is_valid=True)
    return FieldValidation(
        field="registrationType",
        is_valid=False,
        error=FieldError(
            path="registrationType",
            code=FieldErrorCode.MISSING_SELECTION,
            message=REGISTRATION_TYPE_MESSAGE,
            expected=list(options) if options else "one selected option",
            received=selected or None,
        ),
    )


def validate_terms(value: Any) -> FieldValidation:
    """Check that the terms and conditions were accepted.

    A checkbox is accepted when it is ``True`` or any non-empty string (an
    HTML form submits "on" for a checked box and nothing otherwise).

    Examples:
        >>> validate_terms(True).is_valid
        True
        >>> validate_terms("").is_valid
        False
    """
    if isinstance(value, bool):
        accepted = value
    else:
        accepted = value is not None and str(value).strip() != ""
    if accepted:
        return FieldValidation(field="acceptTerms", is_valid=True)
    return FieldValidation(
        field="acceptTerms",
        is_valid=False,
        error=FieldError(
            path="acceptTerms",
            code=FieldErrorCode.MISSING_CONSENT,
            message=TERMS_MESSAGE,
        ),
    )


class ValidationEngine:
    """Rule engine for the registration form.

    Wraps a jsonschema Draft 7 validator per field and translates its errors
    into FieldError values with the form's messages. The date of birth rule is
    implemented as a custom "birthdate" format evaluated against the injected
    clock.

    Attributes:
        schema: The combined JSON Schema for every per-field rule
        min_age: Minimum age in whole years
        registration_types: Allowed registration type options (empty = any)

    Examples:
        >>> engine = ValidationEngine()
        >>> engine.validate_field("fullName", "  A ").message
        'Full name must be at least 2 characters long.'
        >>> engine.validate_field("fullName", "Al").is_valid
        True
    """

    def __init__(
        self,
        min_age: int = DEFAULT_MIN_AGE,
        registration_types: Sequence[str] = (),
        clock: Optional[Clock] = None,
        definitions: Sequence[FieldDefinition] = FIELD_DEFINITIONS,
    ) -> None:
        """Initialize the engine.

        Args:
            min_age: Minimum participant age in whole years
            registration_types: Allowed registration type options
            clock: Callable returning the current datetime (defaults to local time)
            definitions: Field table to build the rules from

        Raises:
            jsonschema.SchemaError: If a field rule is not valid JSON Schema
        """
        self.min_age = min_age
        self.registration_types = tuple(registration_types)
        self._clock = clock or local_now
        self._definitions = {d.name: d for d in definitions}
        self.schema = build_form_schema(definitions)
        Draft7Validator.check_schema(self.schema)

        format_checker = FormatChecker()
        format_checker.checks(BIRTHDATE_FORMAT)(self._is_old_enough)

        self._validators: Dict[str, Draft7Validator] = {}
        for name, prop in self.schema["properties"].items():
            field_schema = {
                "type": "object",
                "properties": {name: prop},
                "required": [name] if name in self.schema["required"] else [],
            }
            self._validators[name] = Draft7Validator(field_schema, format_checker=format_checker)

    def today(self) -> date:
        return self._clock().date()

    def _is_old_enough(self, instance: Any) -> bool:
        if not isinstance(instance, str):
            return True
        birthdate = parse_birthdate(instance)
        if birthdate is None:
            return False
        return age_on(birthdate, self.today()) >= self.min_age

    def validate_field(self, name: str, value: Any) -> FieldValidation:
        """Validate one field's value.

        The value is trimmed first. Empty values only face the required
        check; fields without a per-field rule always pass.

        Args:
            name: Field name
            value: Raw field value

        Returns:
            FieldValidation with at most one error
        """
        validator = self._validators.get(name)
        if validator is None:
            return FieldValidation(field=name, is_valid=True)

        trimmed = str(value).strip() if value is not None else ""
        data = {name: trimmed} if trimmed else {}
        error = next(iter(validator.iter_errors(data)), None)
        if error is None:
            logger.debug("Field %s passed validation", name)
            return FieldValidation(field=name, is_valid=True)

        field_error = self._translate_error(name, error)
        logger.debug("Field %s failed validation: %s", name, field_error.code.value)
        return FieldValidation(field=name, is_valid=False, error=field_error)

    def validate_form(self, values: Mapping[str, Any]) -> FormValidationResult:
        """Validate every field plus the registration type and terms checks.

        Args:
            values: Mapping of field name to raw value (e.g. a FormSnapshot)

        Returns:
            FormValidationResult; valid only if every check passed
        """
        outcomes: List[FieldValidation] = [
            self.validate_field(name, values.get(name, "")) for name in self._validators
        ]
        outcomes.append(
            validate_registration_type(values.get("registrationType", ""), self.registration_types)
        )
        outcomes.append(validate_terms(values.get("acceptTerms", "")))

        errors = [o.error for o in outcomes if o.error is not None]
        data = {name: values.get(name, "") for name in self._definitions}
        return FormValidationResult(
            is_valid=not errors,
            errors=errors,
            data=data,
            missing_fields=[e.path for e in errors if e.code in MISSING_CODES],
            invalid_fields=[e.path for e in errors if e.code not in MISSING_CODES],
        )

    def _translate_error(self, name: str, error: jsonschema.ValidationError) -> FieldError:
        """Translate a jsonschema ValidationError to a FieldError.

        Error mapping:
            - 'required' -> REQUIRED, "<Label> is required."
            - 'minLength' -> TOO_SHORT
            - 'maxLength' -> TOO_LONG
            - 'pattern' -> INVALID_FORMAT
            - 'format' (birthdate) -> UNDERAGE, or INVALID_FORMAT if not a date
        """
        definition = self._definitions[name]
        message = (definition.message or "").format(min_age=self.min_age)

        if error.validator == "required":
            return FieldError(
                path=name,
                code=FieldErrorCode.REQUIRED,
                message=definition.required_message,
                expected="required field",
            )

        if error.validator == "minLength":
            return FieldError(
                path=name,
                code=FieldErrorCode.TOO_SHORT,
                message=message,
                expected=f"minimum {error.validator_value} characters",
                received=f"{len(error.instance)} characters",
            )

        if error.validator == "maxLength":
            return FieldError(
                path=name,
                code=FieldErrorCode.TOO_LONG,
                message=message,
                expected=f"maximum {error.validator_value} characters",
                received=f"{len(error.instance)} characters",
            )

        if error.validator == "format":
            birthdate = parse_birthdate(error.instance)
            if birthdate is None:
                return FieldError(
                    path=name,
                    code=FieldErrorCode.INVALID_FORMAT,
                    message=message,
                    expected="date",
                    received=error.instance,
                )
            return FieldError(
                path=name,
                code=FieldErrorCode.UNDERAGE,
                message=message,
                expected=f"age of at least {self.min_age}",
                received=f"age {age_on(birthdate, self.today())}",
            )

        # pattern, and anything a custom rule might add
        return FieldError(
            path=name,
            code=FieldErrorCode.INVALID_FORMAT,
            message=message,
            expected=f"pattern: {error.validator_value}" if error.validator == "pattern" else error.validator_value,
            received=error.instance,
        )


__all__ = [
    "DEFAULT_MIN_AGE",
    "REGISTRATION_TYPE_MESSAGE",
    "TERMS_MESSAGE",
    "FieldValidation",
    "FormValidationResult",
    "ValidationEngine",
    "age_on",
    "build_form_schema",
    "local_now",
    "parse_birthdate",
    "validate_registration_type",
    "validate_terms",
]
