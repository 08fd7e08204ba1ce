"""Unit tests for registration configuration.

Tests cover:
- Defaults
- Parsing camelCase dicts
- Schema violations raising ConfigurationError
"""

import pytest

from tourneyform.config import RegistrationConfig
from tourneyform.errors import ConfigurationError


class TestDefaults:
    """Test default settings."""

    def test_defaults(self):
        """Should target the wa.me recipient with a 5 second error notice."""
        config = RegistrationConfig()

        assert config.messaging_host == "wa.me"
        assert config.destination_id == "9779766115626"
        assert config.error_notice_ttl_ms == 5000
        assert config.min_age == 13
        assert config.registration_types == ()
        assert config.date_format is None

    def test_empty_dict_gives_defaults(self):
        """Should keep defaults for absent keys."""
        assert RegistrationConfig.from_dict({}) == RegistrationConfig()


class TestFromDict:
    """Test building configs from dicts."""

    def test_all_keys(self):
        """Should map every camelCase key."""
        config = RegistrationConfig.from_dict(
            {
                "messagingHost": "api.whatsapp.com",
                "destinationId": "15551234567",
                "errorNoticeTtlMs": 3000,
                "minAge": 16,
                "title": "SUMMER CUP",
                "organizerName": "Kathmandu Clash",
                "registrationTypes": ["Solo", "Duo", "Squad"],
                "dateFormat": "%Y-%m-%d",
            }
        )

        assert config.messaging_host == "api.whatsapp.com"
        assert config.destination_id == "15551234567"
        assert config.error_notice_ttl_ms == 3000
        assert config.min_age == 16
        assert config.registration_types == ("Solo", "Duo", "Squad")
        assert config.date_format == "%Y-%m-%d"

    def test_round_trip(self):
        """Should rebuild an equal config from to_dict output."""
        config = RegistrationConfig(registration_types=("Solo",), min_age=15)

        assert RegistrationConfig.from_dict(config.to_dict()) == config

    @pytest.mark.parametrize(
        "data,path",
        [
            ({"destinationId": "+977 976"}, "destinationId"),
            ({"errorNoticeTtlMs": -1}, "errorNoticeTtlMs"),
            ({"minAge": "13"}, "minAge"),
            ({"messagingHost": "wa.me/evil"}, "messagingHost"),
            ({"registrationTypes": ["Solo", "Solo"]}, "registrationTypes"),
        ],
    )
    def test_invalid_values_rejected(self, data, path):
        """Should raise ConfigurationError naming the offending key."""
        with pytest.raises(ConfigurationError) as exc_info:
            RegistrationConfig.from_dict(data)

        assert exc_info.value.path == path
        assert path in str(exc_info.value)

    def test_unknown_key_rejected(self):
        """Should reject keys outside the schema."""
        with pytest.raises(ConfigurationError):
            RegistrationConfig.from_dict({"destination": "123"})

    def test_configuration_error_is_value_error(self):
        """Should be catchable as ValueError."""
        with pytest.raises(ValueError):
            RegistrationConfig.from_dict({"minAge": -5})
