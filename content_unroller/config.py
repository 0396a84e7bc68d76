# Content Unroller Configuration
"""Configuration settings loaded from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Content Unroller settings from environment variables."""

    # Service identity
    app_system_code: str = Field(
        default="content-unroller",
        description="System code reported by the health endpoint",
    )
    app_name: str = Field(default="Content Unroller", description="Service name")
    app_description: str = Field(
        default="Content Unroller - unroll images and dynamic content for a given content",
        description="Service description",
    )
    app_version: str = Field(default="1.0.0", description="Service version")

    # Content store connection
    content_store_app_name: str = Field(
        default="content-public-read",
        description="Content read app",
    )
    content_store_host: str = Field(
        default="http://localhost:8080/__content-public-read",
        description="Content source hostname",
    )
    content_path: str = Field(default="/content", description="/content path")
    internal_content_path: str = Field(
        default="/internalcontent",
        description="/internalcontent path",
    )
    content_store_timeout: float = Field(
        default=10.0,
        description="Content store request timeout in seconds",
    )

    # Unrolling
    api_host: str = Field(
        default="test.api.ft.com",
        description="API host to use for URLs in responses",
    )
    ccc_max_depth: int = Field(
        default=1,
        ge=0,
        description="How many levels of CustomCodeComponent bodies are resolved",
    )

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=9090, description="Server port")
    log_level: str = Field(default="INFO", description="Logging level")
    debug: bool = Field(default=False, description="Debug mode")

    class Config:
        env_prefix = ""
        case_sensitive = False
        env_file = ".env"
        env_file_encoding = "utf-8"


# Global settings instance
settings = Settings()
