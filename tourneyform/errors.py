"""Structured error types for tourneyform.

Validation failures are never raised. They are returned as FieldError values,
attached to the offending field, and aggregated by the submission orchestrator
into a single FormError envelope.

ConfigurationError is the only exception raised by the package itself; it
signals a bad configuration dict, which is a programming error rather than a
user input problem.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from tourneyform.types import FieldErrorCode

GENERIC_FORM_ERROR = "Please fix all errors before submitting."


class ConfigurationError(ValueError):
    """Raised when a registration configuration fails schema validation.

    Attributes:
        path: Dot-notation path of the offending config key ("" for the root)
        message: Human-readable error message
    """

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(message)


@dataclass(frozen=True)
class FieldError:
    """Per-field validation error details.

    Attributes:
        path: Field name the error is attached to (e.g., "email", "acceptTerms")
        code: Specific validation error code
        message: Human-readable error description shown next to the field
        expected: Optional - what was expected (length bounds, pattern, etc.)
        received: Optional - what was actually received

    Examples:
        >>> err = FieldError(
        ...     path="email",
        ...     code=FieldErrorCode.INVALID_FORMAT,
        ...     message="Please enter a valid email address.",
        ...     received="a.com"
        ... )
        >>> err.path
        'email'
    """
    path: str
    code: FieldErrorCode
    message: str
    expected: Optional[Any] = None
    received: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        result: Dict[str, Any] = {
            "path": self.path,
            "code": self.code.value if isinstance(self.code, FieldErrorCode) else self.code,
            "message": self.message,
        }
        if self.expected is not None:
            result["expected"] = self.expected
        if self.received is not None:
            result["received"] = self.received
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldError":
        """Create FieldError from dict."""
        code = data["code"]
        if isinstance(code, str):
            code = FieldErrorCode(code)
        return cls(
            path=data["path"],
            code=code,
            message=data["message"],
            expected=data.get("expected"),
            received=data.get("received"),
        )


@dataclass(frozen=True)
class FormError:
    """Error envelope returned when a submission is blocked.

    The top-level message is always the generic notice; the individual field
    messages stay attached to their fields and are listed in ``fields`` only
    for callers that want them.

    Examples:
        >>> err = FormError(fields=[
        ...     FieldError(path="acceptTerms", code=FieldErrorCode.MISSING_CONSENT,
        ...                message="You must accept the terms and conditions.")
        ... ])
        >>> err.message
        'Please fix all errors before submitting.'
        >>> err.paths
        ['acceptTerms']
    """
    fields: List[FieldError]
    message: str = GENERIC_FORM_ERROR

    @property
    def ok(self) -> bool:
        """Always returns False - this is an error response."""
        return False

    @property
    def paths(self) -> List[str]:
        return [f.path for f in self.fields]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "ok": False,
            "message": self.message,
            "fields": [f.to_dict() for f in self.fields],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FormError":
        """Create FormError from dict."""
        return cls(
            fields=[FieldError.from_dict(f) for f in data.get("fields", [])],
            message=data.get("message", GENERIC_FORM_ERROR),
        )


__all__ = [
    "GENERIC_FORM_ERROR",
    "ConfigurationError",
    "FieldError",
    "FormError",
]
