"""Tests for application configuration."""
import pytest

from core.config import Settings


class TestSettingsDefaults:
    """Tests for default values."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Defaults match the deployed table and pagination bounds."""
        for name in ("API_KEY", "TABLE_NAME", "AWS_REGION", "DYNAMODB_ENDPOINT_URL"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)
        assert settings.api_key == ""
        assert settings.table_name == "saved_urls"
        assert settings.aws_region == "us-east-1"
        assert settings.dynamodb_endpoint_url is None
        assert settings.default_page_size == 50
        assert settings.max_page_size == 100

    def test_api_key_not_configured_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without API_KEY the server is misconfigured."""
        monkeypatch.delenv("API_KEY", raising=False)
        assert Settings(_env_file=None).is_api_key_configured is False


class TestSettingsFromEnvironment:
    """Tests for reading the process environment."""

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """API_KEY, TABLE_NAME and AWS_REGION come from the environment."""
        monkeypatch.setenv("API_KEY", "from-env")
        monkeypatch.setenv("TABLE_NAME", "bookmarks_test")
        monkeypatch.setenv("AWS_REGION", "eu-west-1")
        settings = Settings(_env_file=None)
        assert settings.api_key == "from-env"
        assert settings.table_name == "bookmarks_test"
        assert settings.aws_region == "eu-west-1"
        assert settings.is_api_key_configured is True

    def test_whitespace_api_key_is_not_configured(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A blank API key counts as missing."""
        monkeypatch.setenv("API_KEY", "   ")
        assert Settings(_env_file=None).is_api_key_configured is False
