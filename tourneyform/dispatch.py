"""Destination link construction and dispatch.

The composed message leaves the form as a single deep link of the shape
``https://<host>/<destination-id>?text=<encoded message>``. The link is handed
to a LinkOpener, the boundary between this package and its host environment.
Opening is fire-and-forget: nothing waits for, or depends on, the outcome.
"""

import logging
import webbrowser
from typing import Optional
from urllib.parse import parse_qs, quote, urlsplit

from typing_extensions import Protocol, runtime_checkable

from tourneyform.config import RegistrationConfig

logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves alone besides letters, digits and "-_.~"
URI_COMPONENT_SAFE = "!*'()"


def encode_message(message: str) -> str:
    """Percent-encode a message for use as a query parameter value.

    Examples:
        >>> encode_message("Hi there & bye!")
        'Hi%20there%20%26%20bye!'
    """
    return quote(message, safe=URI_COMPONENT_SAFE)


def build_destination_link(message: str, config: Optional[RegistrationConfig] = None) -> str:
    """Build the deep link that pre-fills ``message`` for the destination.

    Examples:
        >>> build_destination_link("Hello")
        'https://wa.me/9779766115626?text=Hello'
    """
    config = config or RegistrationConfig()
    return f"https://{config.messaging_host}/{config.destination_id}?text={encode_message(message)}"


def parse_destination_link(url: str) -> str:
    """Return the decoded message carried by a destination link.

    Raises:
        ValueError: If the link has no ``text`` parameter
    """
    query = parse_qs(urlsplit(url).query, keep_blank_values=True)
    if "text" not in query:
        raise ValueError(f"Destination link has no text parameter: {url}")
    return query["text"][0]


@runtime_checkable
class LinkOpener(Protocol):
    """Host environment action that opens a URL in a new tab."""

    def open_new_tab(self, url: str) -> bool:
        ...


class BrowserLinkOpener:
    """LinkOpener backed by the standard library webbrowser module."""

    def open_new_tab(self, url: str) -> bool:
        return webbrowser.open_new_tab(url)


def dispatch_link(url: str, opener: LinkOpener) -> bool:
    """Request that ``opener`` open the link, without waiting on the result.

    Returns:
        Whatever the opener reported; callers proceed regardless
    """
    opened = opener.open_new_tab(url)
    if not opened:
        logger.warning("Link opener reported that the destination link was not opened")
    return bool(opened)


__all__ = [
    "BrowserLinkOpener",
    "LinkOpener",
    "build_destination_link",
    "dispatch_link",
    "encode_message",
    "parse_destination_link",
]
