"""Application configuration using Pydantic Settings"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    api_host: str = "0.0.0.0"
    api_port: int = 4000
    api_prefix: str = "/api"

    # Record store
    data_file: str = "data/store.json"

    # Admin
    admin_password: str = ""

    # AWS / S3 media host
    aws_region: str = "us-east-1"
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_endpoint_url: Optional[str] = None
    s3_bucket: Optional[str] = None
    media_folder: str = ""
    media_public_url: Optional[str] = None
    order_object_key: str = "portfolio_config/display_order.json"

    # Uploads
    max_upload_files: int = 20
    max_upload_size_bytes: int = 20 * 1024 * 1024  # 20MB

    # CORS
    cors_origins: str = "*"

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list"""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def media_configured(self) -> bool:
        """True when the media host has a bucket and credentials"""
        return bool(self.s3_bucket and self.aws_access_key_id and self.aws_secret_access_key)

    @property
    def media_base_folder(self) -> str:
        return self.media_folder.strip("/")


@lru_cache
def get_settings() -> Settings:
    """Settings for the process entry point"""
    return Settings()
