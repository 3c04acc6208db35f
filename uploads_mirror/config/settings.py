"""
Application configuration using Pydantic settings.

Configuration is loaded from environment variables (or a .env file).
The S3_UPLOADS_* names match what the host's own deployment already
sets, so the mirror can be dropped next to it without renaming anything.

Only the bucket path matters for turning mirroring on. Without it the
service still runs and answers hooks, it just never touches a bucket.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    For lists (like api_keys), use comma-separated values in env.
    """

    # API Configuration
    api_title: str = "Uploads Mirror"
    api_version: str = "v1"
    api_keys: str = Field(
        default="dev-key-1",
        description="Comma-separated API keys accepted on the hook endpoints."
    )

    # Object store
    s3_uploads_bucket: Optional[str] = Field(
        default=None,
        description="Bucket path as bucket[/key/prefix]. Mirroring is off when unset."
    )
    s3_uploads_region: str = Field(
        default="us-west-1",
        description="Object store region"
    )
    s3_uploads_key: Optional[str] = Field(
        default=None,
        description="Static access key. Ignored unless the secret is also set."
    )
    s3_uploads_secret: Optional[str] = Field(
        default=None,
        description="Static secret key"
    )
    s3_uploads_endpoint: Optional[str] = Field(
        default=None,
        description="Custom endpoint for S3-compatible servers. Enables path-style addressing."
    )
    s3_uploads_bucket_url: Optional[str] = Field(
        default=None,
        description="Public base URL for mirrored files, returned to the host instead of its own."
    )
    s3_uploads_object_acl: str = Field(
        default="public-read",
        description="Canned ACL applied to every uploaded object"
    )
    s3_uploads_max_pool_connections: int = Field(
        default=10,
        ge=1,
        description="Connection pool size. Bounds how many uploads run at once."
    )
    s3_uploads_mock_mode: bool = Field(
        default=False,
        description="Use an in-memory store instead of S3. Enables local dev without a bucket."
    )

    # Host uploads location
    uploads_basedir: str = Field(
        default="/var/www/uploads",
        description="Absolute directory the host stores uploads in"
    )
    uploads_baseurl: str = Field(
        default="http://localhost/uploads",
        description="Public URL the host serves uploads from"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_json: bool = Field(
        default=True,
        description="Emit one JSON object per log line"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @property
    def api_keys_list(self) -> list[str]:
        """Parse comma-separated API keys into a list."""
        return [key.strip() for key in self.api_keys.split(",") if key.strip()]

    @property
    def mirroring_enabled(self) -> bool:
        """Mirroring needs nothing but a bucket path."""
        return self.s3_uploads_bucket is not None

    def validate_required_fields(self) -> list[str]:
        """
        Report settings that look incomplete.

        Nothing here is fatal: a missing bucket just disables mirroring,
        and half a credential pair falls back to the default chain.
        """
        missing = []

        if not self.api_keys_list:
            missing.append("API_KEYS")

        if bool(self.s3_uploads_key) != bool(self.s3_uploads_secret):
            missing.append("S3_UPLOADS_KEY and S3_UPLOADS_SECRET must be set together")

        return missing


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache means we only load settings once per process.
    For tests, call get_settings.cache_clear() to reset.
    """
    return Settings()
