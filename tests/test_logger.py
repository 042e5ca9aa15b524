"""Logging configuration: per-logger level overrides."""

import pytest
from transport_admin.utils.logger import parse_level_overrides


class TestParseLevelOverrides:
    def test_empty(self):
        assert parse_level_overrides("") == {}
        assert parse_level_overrides(None) == {}

    def test_names_and_levels_normalised(self):
        spec = " sqlalchemy.engine = info ,transport_admin.gateway=DEBUG,"
        assert parse_level_overrides(spec) == {
            "sqlalchemy.engine": "INFO",
            "transport_admin.gateway": "DEBUG",
        }

    @pytest.mark.parametrize("spec", ["sqlalchemy.engine", "=DEBUG", "transport_admin=LOUD"])
    def test_malformed_entry(self, spec):
        with pytest.raises(ValueError, match="Invalid LOG_LEVELS entry"):
            parse_level_overrides(spec)
