"""Shared fixtures for the tourneyform tests."""

from datetime import datetime, timezone
from typing import List

import pytest

FIXED_NOW = datetime(2024, 6, 15, 10, 30, tzinfo=timezone.utc)

VALID_VALUES = {
    "fullName": "Aarav Shrestha",
    "inGameName": "AaravFF",
    "freeFireUID": "1234567890",
    "whatsappNumber": "+977 9766115626",
    "email": "aarav@example.com",
    "dateOfBirth": "2005-03-21",
    "province": "Bagmati",
    "city": "Kathmandu",
    "teamName": "Tigers",
    "registrationType": "Squad",
    "server": "Nepal",
    "referCode": "",
    "acceptTerms": "on",
}


class FakeClock:
    """Clock returning a settable instant."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class RecordingOpener:
    """LinkOpener that records the URLs it was asked to open."""

    def __init__(self, result: bool = True):
        self.result = result
        self.urls: List[str] = []

    def open_new_tab(self, url: str) -> bool:
        self.urls.append(url)
        return self.result


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def opener():
    return RecordingOpener()


@pytest.fixture
def valid_values():
    return dict(VALID_VALUES)
