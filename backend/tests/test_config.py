"""Tests for backend/search_fallback/config.py — Settings validation."""
from __future__ import annotations

import os
from unittest.mock import patch

import pytest


class TestAdminKeyValidation:
    """Verify ADMIN_API_KEY enforcement in Settings."""

    def test_empty_admin_key_raises_without_escape_hatch(self):
        """Settings() must raise when ADMIN_API_KEY is empty
        and ALLOW_OPEN_ADMIN is not set."""
        from search_fallback.config import Settings

        env = {"ADMIN_API_KEY": "", "ALLOW_OPEN_ADMIN": "0"}
        with patch.dict(os.environ, env, clear=False):
            with pytest.raises(ValueError, match="ADMIN_API_KEY is not set"):
                Settings(_env_file=None)

    def test_whitespace_admin_key_raises(self):
        """Whitespace-only ADMIN_API_KEY should also be rejected."""
        from search_fallback.config import Settings

        env = {"ADMIN_API_KEY": "   ", "ALLOW_OPEN_ADMIN": "0"}
        with patch.dict(os.environ, env, clear=False):
            with pytest.raises(ValueError, match="ADMIN_API_KEY is not set"):
                Settings(_env_file=None)

    def test_allow_open_admin_suppresses_error(self):
        """ALLOW_OPEN_ADMIN=1 downgrades the error to a warning."""
        from search_fallback.config import Settings

        env = {"ADMIN_API_KEY": "", "ALLOW_OPEN_ADMIN": "1"}
        with patch.dict(os.environ, env, clear=False):
            import warnings
            with warnings.catch_warnings(record=True) as w:
                warnings.simplefilter("always")
                s = Settings(_env_file=None)
                assert s.admin_api_key == ""
                assert s.allow_open_admin is True
                assert any("ALLOW_OPEN_ADMIN" in str(warning.message) for warning in w)

    def test_admin_key_whitespace_is_stripped(self):
        from search_fallback.config import Settings

        with patch.dict(os.environ, {"ADMIN_API_KEY": "  my-key  "}, clear=False):
            s = Settings(_env_file=None)
            assert s.admin_api_key == "my-key"


class TestDefaults:
    def test_engine_defaults(self):
        from search_fallback.config import Settings

        with patch.dict(os.environ, {"ADMIN_API_KEY": "k"}, clear=False):
            s = Settings(_env_file=None)
        assert s.similarity_threshold == 0.6
        assert s.catalog_scan_limit == 100
        assert s.interest_expiry_days == 30
        assert s.smtp_port == 587


class TestRangeValidation:
    @pytest.mark.parametrize(
        "name,value,message",
        [
            ("SIMILARITY_THRESHOLD", "1.5", "SIMILARITY_THRESHOLD"),
            ("SIMILARITY_THRESHOLD", "-0.1", "SIMILARITY_THRESHOLD"),
            ("CATALOG_SCAN_LIMIT", "-1", "CATALOG_SCAN_LIMIT"),
            ("INTEREST_EXPIRY_DAYS", "0", "INTEREST_EXPIRY_DAYS"),
            ("INTEREST_NOTIFY_CONCURRENCY", "0", "INTEREST_NOTIFY_CONCURRENCY"),
        ],
    )
    def test_out_of_range_rejected(self, name, value, message):
        from search_fallback.config import Settings

        with patch.dict(os.environ, {"ADMIN_API_KEY": "k", name: value}, clear=False):
            with pytest.raises(ValueError, match=message):
                Settings(_env_file=None)
