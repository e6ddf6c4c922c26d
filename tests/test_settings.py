"""Tests for environment-driven settings."""

from urlsigner.common.settings import Settings


class TestSettings:
    """Test Settings loading and conversion."""

    def test_defaults(self, monkeypatch):
        """Defaults match the signer defaults."""
        monkeypatch.delenv("URLSIGNER_SECRET", raising=False)
        settings = Settings(_env_file=None)

        assert settings.param_name == "verify"
        assert settings.use_timestamp is True
        assert settings.strip_words == ("scaled",)
        assert settings.secret_bytes() is None

    def test_from_environment(self, monkeypatch):
        """Environment variables with the prefix are read."""
        monkeypatch.setenv("URLSIGNER_BASE_URL", "https://cdn.example.com/")
        monkeypatch.setenv("URLSIGNER_SECRET", "k")
        monkeypatch.setenv("URLSIGNER_RESOURCE_BASE", "previews")
        monkeypatch.setenv("URLSIGNER_USE_TIMESTAMP", "false")
        monkeypatch.setenv("URLSIGNER_STRIP_WORDS", '["scaled", "thumb"]')

        config = Settings(_env_file=None).signer_config()

        assert config.base_url == "https://cdn.example.com"
        assert config.secret == b"k"
        assert config.resource_base == "/previews"
        assert config.use_timestamp is False
        assert config.strip_words == ("scaled", "thumb")

    def test_secret_not_in_repr(self, monkeypatch):
        """SecretStr keeps the secret out of repr."""
        monkeypatch.setenv("URLSIGNER_SECRET", "hunter2")
        assert "hunter2" not in repr(Settings(_env_file=None))
