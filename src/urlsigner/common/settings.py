"""Configuration management using pydantic-settings."""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from urlsigner.signer.config import SignerConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="URLSIGNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Signing
    base_url: str = Field(
        default="http://localhost:8080",
        description="Base URL prepended to signed paths (not signed)",
    )
    secret: SecretStr | None = Field(
        default=None,
        description="Shared HMAC secret",
    )
    resource_base: str | None = Field(
        default=None,
        description="Path prefix prepended to every resource before signing",
    )
    param_name: str = Field(
        default="verify",
        description="Query parameter carrying the token",
    )
    use_timestamp: bool = Field(
        default=True,
        description="Mix the current Unix time into the signed message",
    )
    strip_words: tuple[str, ...] = Field(
        default=("scaled",),
        description="Words removed from resolved filenames (JSON list)",
    )

    # Verification
    max_skew_seconds: int | None = Field(
        default=600,
        description="Accepted clock skew for timestamped tokens (None disables the check)",
    )
    gateway_exempt_paths: tuple[str, ...] = Field(
        default=("/health", "/metrics"),
        description="Paths the gateway middleware does not verify",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level",
    )
    log_json: bool = Field(
        default=False,
        description="Render logs as JSON lines",
    )

    def secret_bytes(self) -> bytes | None:
        """Return the secret as bytes, or None when unset."""
        if self.secret is None:
            return None
        return self.secret.get_secret_value().encode("utf-8")

    def signer_config(self) -> SignerConfig:
        """Build a SignerConfig from these settings."""
        from urlsigner.signer.config import SignerConfig

        return SignerConfig(
            base_url=self.base_url,
            secret=self.secret_bytes() or b"",
            resource_base=self.resource_base,
            param_name=self.param_name,
            use_timestamp=self.use_timestamp,
            strip_words=self.strip_words,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
