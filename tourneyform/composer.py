"""Message composition for completed registrations.

compose_message fills a fixed, sectioned template with the values of a
FormSnapshot. Values are substituted verbatim; URL encoding happens once, on
the finished text, when the destination link is built.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from tourneyform.config import RegistrationConfig
from tourneyform.validation import local_now

BULLET = "•"


def format_registration_date(moment: datetime, date_format: Optional[str] = None) -> str:
    """Format the registration date.

    Without a pattern the US short form is used (month/day/year, no padding).

    Examples:
        >>> format_registration_date(datetime(2024, 3, 7))
        '3/7/2024'
        >>> format_registration_date(datetime(2024, 3, 7), "%Y-%m-%d")
        '2024-03-07'
    """
    if date_format:
        return moment.strftime(date_format)
    return f"{moment.month}/{moment.day}/{moment.year}"


def registration_id_for(moment: datetime) -> int:
    """Milliseconds since the Unix epoch at ``moment``."""
    return int(moment.timestamp() * 1000)


@dataclass(frozen=True)
class RegistrationMessage:
    """A composed registration message.

    Attributes:
        text: The full message, trimmed
        registration_id: Timestamp-derived identifier (milliseconds since epoch)
        composed_at: When the message was composed
    """
    text: str
    registration_id: int
    composed_at: datetime

    def __str__(self) -> str:
        return self.text

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "text": self.text,
            "registrationId": self.registration_id,
            "composedAt": self.composed_at.isoformat(),
        }


def compose_message(
    snapshot: Mapping[str, str],
    now: Optional[datetime] = None,
    config: Optional[RegistrationConfig] = None,
) -> RegistrationMessage:
    """Render the registration message for a snapshot.

    The refer code line is present only when a refer code was entered; when it
    is empty its line is left blank so the layout of the rest of the message
    does not change.

    Args:
        snapshot: Field values (a FormSnapshot or any mapping)
        now: Composition time (defaults to the current local time)
        config: Supplies the title, organizer name and date format

    Returns:
        RegistrationMessage with the trimmed text and registration id
    """
    config = config or RegistrationConfig()
    now = now or local_now()

    def value(name: str) -> str:
        return snapshot.get(name, "")

    refer_code = value("referCode")
    refer_line = f"{BULLET} Refer Code: {refer_code}" if refer_code else ""
    registration_id = registration_id_for(now)

    lines: List[str] = [
        f"\U0001F3AE *{config.title}* \U0001F3AE",
        "",
        "\U0001F464 *Player Information:*",
        f"{BULLET} Full Name: {value('fullName')}",
        f"{BULLET} In-Game Name: {value('inGameName')}",
        f"{BULLET} Free Fire UID: {value('freeFireUID')}",
        f"{BULLET} WhatsApp: {value('whatsappNumber')}",
        f"{BULLET} Email: {value('email')}",
        f"{BULLET} Date of Birth: {value('dateOfBirth')}",
        "",
        "\U0001F4CD *Location:*",
        f"{BULLET} Province: {value('province')}",
        f"{BULLET} City/Village: {value('city')}",
        "",
        "\U0001F3C6 *Tournament Details:*",
        f"{BULLET} Team Name: {value('teamName')}",
        f"{BULLET} Registration Type: {value('registrationType')}",
        f"{BULLET} Server: {value('server')}",
        refer_line,
        "",
        f"\U0001F4C5 *Registration Date:* {format_registration_date(now, config.date_format)}",
        "",
        "✅ Terms & Conditions: Accepted",
        "",
        "---",
        f"*{config.organizer_name}*",
        f"*Registration ID: {registration_id}*",
    ]

    return RegistrationMessage(
        text="\n".join(lines).strip(),
        registration_id=registration_id,
        composed_at=now,
    )


__all__ = [
    "RegistrationMessage",
    "compose_message",
    "format_registration_date",
    "registration_id_for",
]
