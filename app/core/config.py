"""
Application settings.
Database credentials may be loaded from AWS Secrets Manager at startup.
"""
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    # AWS
    AWS_REGION: str = "us-east-1"

    # Database. DATABASE_URL wins; otherwise a PostgreSQL URL is built from DB_*.
    DATABASE_URL: Optional[str] = None
    DB_HOST: Optional[str] = None
    DB_PORT: int = 5432
    DB_NAME: Optional[str] = None
    DB_USER: Optional[str] = None
    DB_PASS: Optional[str] = None
    DB_SECRET_NAME: Optional[str] = None  # e.g. postcard-studio/db

    # Shared secret for generate/save/delete routes
    BEARER_TOKEN: Optional[str] = None

    # Cloudflare Workers AI
    CLOUDFLARE_ACCOUNT_ID: Optional[str] = None
    CLOUDFLARE_API_TOKEN: Optional[str] = None
    AI_BASE_URL: str = "https://api.cloudflare.com/client/v4"
    TEXT_MODEL: str = "@cf/openai/gpt-oss-20b"
    IMAGE_MODEL: str = "@cf/leonardo/lucid-origin"
    IMAGE_NUM_STEPS: int = 3
    AI_TIMEOUT_SECONDS: float = 60.0

    # S3 (when set, postcard images are stored in S3)
    S3_BUCKET_NAME: Optional[str] = None
    S3_REGION: Optional[str] = None  # defaults to AWS_REGION

    # Optional
    DEBUG: bool = False
    PROJECT_NAME: str = "Postcard Studio"
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:8000"]

    # Local blob storage when S3_BUCKET_NAME is not set
    UPLOAD_DIR: str = "uploads"

    @property
    def use_s3(self) -> bool:
        return bool(self.S3_BUCKET_NAME)

    @property
    def s3_region(self) -> str:
        return self.S3_REGION or self.AWS_REGION

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.DB_HOST:
            return (
                f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASS}"
                f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
            )
        return "sqlite:///./postcards.db"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()

# Load DB credentials from AWS Secrets Manager only when a secret is named and
# the connection isn't already provided via environment variables.
if settings.DB_SECRET_NAME and not (settings.DATABASE_URL or settings.DB_HOST):
    from app.aws.secrets import get_secret

    _db_secret = get_secret(settings.DB_SECRET_NAME, region_name=settings.AWS_REGION)
    settings.DB_HOST = _db_secret["host"]
    settings.DB_PORT = int(_db_secret.get("port", 5432))
    settings.DB_NAME = _db_secret["database"]
    settings.DB_USER = _db_secret["username"]
    settings.DB_PASS = _db_secret["password"]
