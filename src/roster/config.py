"""
Configuration management for Roster backend
"""

from pydantic_settings import BaseSettings

DEFAULT_JWT_SECRET = "dev-secret-change-in-production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db_name: str = "roster_dev"
    mongo_max_pool_size: int = 100
    mongo_server_selection_timeout_ms: int = 5000

    # Auth
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    token_expiry_days: int = 7
    bcrypt_rounds: int = 10

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 4000
    api_reload: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]

    # Environment
    environment: str = "development"  # 'development', 'staging', 'production'
    debug: bool = True
    log_level: str = "INFO"

    # Employee photo uploads
    upload_dir: str = "./uploads"
    upload_url_base: str = "/uploads"
    max_upload_size: int = 5 * 1024 * 1024  # 5MB
    allowed_upload_content_types: list[str] = [
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/gif",
        "image/webp",
    ]

    class Config:
        env_file = ".env"
        env_prefix = "ROSTER_"
        case_sensitive = False
        frozen = True


# Global settings instance
settings = Settings()

# Debug: Log settings initialization (only in debug mode)
if settings.debug:
    from .logging import get_logger

    _logger = get_logger(__name__)
    _logger.debug(
        "Settings initialized",
        environment=settings.environment,
        mongo_db_name=settings.mongo_db_name,
    )
