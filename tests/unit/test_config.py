"""
Unit Tests for Configuration Module

These tests verify that the configuration system works correctly:
- Default values are applied when needed
- Comma-separated instrument lists are parsed
- Validation catches invalid configurations

Run with:
    pytest tests/unit/test_config.py -v
"""

import pytest
from core.config import Settings, settings, validate_configuration


class TestConfigurationLoading:
    """Test that configuration loads correctly"""

    def test_source_urls_loaded(self):
        """Verify upstream URLs are set"""
        assert settings.quote_page_base_url.startswith("http")
        assert settings.quotes_api_base_url.startswith("http")
        assert "bcdata.sgs.432" in settings.policy_rate_url

    def test_app_port_is_valid_integer(self):
        """Verify app port is a valid integer"""
        assert isinstance(settings.app_port, int)
        assert 1 <= settings.app_port <= 65535

    def test_request_timeout_is_finite(self):
        """Verify outbound requests always have a timeout"""
        assert settings.request_timeout > 0

    def test_default_cadence(self):
        """Verify default refresh cadence and pacing"""
        config = Settings()
        assert config.refresh_interval_seconds == 180
        assert config.pacing_bounds == (0.4, 0.5)
        assert config.pair_refresh_min_age_seconds == 600
        assert config.change_clamp_percent == 50.0


class TestSymbolsParsing:
    """Test that instrument lists are parsed from comma-separated strings"""

    def test_default_lists(self):
        config = Settings()
        assert config.domestic_equities_list[0] == "ITSA4"
        assert len(config.domestic_equities_list) == 12
        assert len(config.real_estate_funds_list) == 8
        assert config.foreign_etfs_list == ["IVV", "BIL", "SCHD"]

    def test_symbols_are_stripped_and_uppercased(self):
        config = Settings(foreign_etfs=" ivv , spy,,")
        assert config.foreign_etfs_list == ["IVV", "SPY"]

    def test_cors_origins_list(self):
        config = Settings(cors_origins="http://a.test, http://b.test")
        assert config.cors_origins_list == ["http://a.test", "http://b.test"]


class TestConfigurationValidation:
    """Test validate_configuration"""

    def test_defaults_are_valid(self):
        validate_configuration(Settings())

    def test_empty_group_rejected(self):
        with pytest.raises(ValueError, match="FOREIGN_ETFS"):
            validate_configuration(Settings(foreign_etfs=""))

    def test_overlapping_groups_rejected(self):
        with pytest.raises(ValueError, match="disjoint"):
            validate_configuration(Settings(foreign_etfs="IVV,ITSA4"))

    def test_general_symbol_in_listed_group_rejected(self):
        with pytest.raises(ValueError, match="GENERAL"):
            validate_configuration(Settings(domestic_equities="DOLAR,ITSA4"))

    def test_invalid_pacing_rejected(self):
        with pytest.raises(ValueError, match="pacing"):
            validate_configuration(Settings(pacing_min_seconds=0.6, pacing_max_seconds=0.5))

    def test_invalid_interval_rejected(self):
        with pytest.raises(ValueError, match="REFRESH_INTERVAL_SECONDS"):
            validate_configuration(Settings(refresh_interval_seconds=0))

    def test_invalid_port_rejected(self):
        with pytest.raises(ValueError, match="port"):
            validate_configuration(Settings(app_port=70000))

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValueError, match="LOG_LEVEL"):
            validate_configuration(Settings(log_level="LOUD"))
