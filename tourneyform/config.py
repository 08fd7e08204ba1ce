"""Configuration for the registration runtime.

RegistrationConfig carries the constants of a deployment: where the composed
message is sent, how long error notices stay visible, the minimum age, and
the text that brands the message. Dicts are checked against CONFIG_SCHEMA
before a config is built from them.

Usage:
    >>> config = RegistrationConfig.from_dict({"destinationId": "15551234567"})
    >>> config.messaging_host
    'wa.me'
    >>> config.destination_id
    '15551234567'
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from jsonschema import Draft7Validator
from jsonschema.exceptions import best_match

from tourneyform.errors import ConfigurationError

DEFAULT_MESSAGING_HOST = "wa.me"
DEFAULT_DESTINATION_ID = "9779766115626"
DEFAULT_ERROR_NOTICE_TTL_MS = 5000
DEFAULT_TITLE = "FREE FIRE TOURNAMENT REGISTRATION"
DEFAULT_ORGANIZER_NAME = "Taigours E-Sports Tournament"

CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "messagingHost": {"type": "string", "minLength": 1, "pattern": r"^[^/\s]+$"},
        "destinationId": {"type": "string", "pattern": r"^[0-9]+$"},
        "errorNoticeTtlMs": {"type": "integer", "minimum": 0},
        "minAge": {"type": "integer", "minimum": 0},
        "title": {"type": "string"},
        "organizerName": {"type": "string"},
        "registrationTypes": {
            "type": "array",
            "items": {"type": "string", "minLength": 1},
            "uniqueItems": True,
        },
        "dateFormat": {"type": ["string", "null"]},
    },
    "additionalProperties": False,
}

_config_validator = Draft7Validator(CONFIG_SCHEMA)


@dataclass(frozen=True)
class RegistrationConfig:
    """Deployment settings for a registration form.

    Attributes:
        messaging_host: Host of the messaging deep-link service
        destination_id: Recipient id appended to the link path
        error_notice_ttl_ms: How long an error notice stays visible
        min_age: Minimum participant age in whole years
        title: Heading of the composed message
        organizer_name: Signature line of the composed message
        registration_types: Allowed registration type options (empty = any)
        date_format: strftime pattern for the registration date, or None for M/D/YYYY
    """
    messaging_host: str = DEFAULT_MESSAGING_HOST
    destination_id: str = DEFAULT_DESTINATION_ID
    error_notice_ttl_ms: int = DEFAULT_ERROR_NOTICE_TTL_MS
    min_age: int = 13
    title: str = DEFAULT_TITLE
    organizer_name: str = DEFAULT_ORGANIZER_NAME
    registration_types: Tuple[str, ...] = ()
    date_format: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "messagingHost": self.messaging_host,
            "destinationId": self.destination_id,
            "errorNoticeTtlMs": self.error_notice_ttl_ms,
            "minAge": self.min_age,
            "title": self.title,
            "organizerName": self.organizer_name,
            "registrationTypes": list(self.registration_types),
            "dateFormat": self.date_format,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RegistrationConfig":
        """Create RegistrationConfig from a camelCase dict.

        Keys that are absent keep their defaults.

        Raises:
            ConfigurationError: If the dict does not match CONFIG_SCHEMA
        """
        error = best_match(_config_validator.iter_errors(data))
        if error is not None:
            path = ".".join(str(p) for p in error.path)
            raise ConfigurationError(path, f"Invalid registration config at '{path}': {error.message}")

        defaults = cls()
        return cls(
            messaging_host=data.get("messagingHost", defaults.messaging_host),
            destination_id=data.get("destinationId", defaults.destination_id),
            error_notice_ttl_ms=data.get("errorNoticeTtlMs", defaults.error_notice_ttl_ms),
            min_age=data.get("minAge", defaults.min_age),
            title=data.get("title", defaults.title),
            organizer_name=data.get("organizerName", defaults.organizer_name),
            registration_types=tuple(data.get("registrationTypes", ())),
            date_format=data.get("dateFormat", defaults.date_format),
        )


__all__ = [
    "CONFIG_SCHEMA",
    "DEFAULT_DESTINATION_ID",
    "DEFAULT_MESSAGING_HOST",
    "RegistrationConfig",
]
