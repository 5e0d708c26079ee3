from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite:///./tubely.db"

    # JWT
    secret_key: str = "your-secret-key-change-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # Server
    host: str = "0.0.0.0"
    port: int = 8091
    log_level: str = "info"

    # Frontend URL for CORS
    frontend_url: str = "http://localhost:3000"

    # Thumbnails: written here and served under /assets
    assets_root: str = "./assets"

    # Raw and fast-start copies of uploaded videos live here until the request ends
    tmp_dir: str = "/tmp"

    # S3-compatible object storage (empty endpoint = AWS)
    s3_bucket: str = ""
    s3_region: str = "us-east-1"
    s3_endpoint_url: str = ""
    s3_access_key_id: str = ""
    s3_secret_access_key: str = ""

    # CDN host in front of the bucket, e.g. d111111abcdef8.cloudfront.net
    s3_cf_distribution: str = ""

    # External media tools
    ffprobe_path: str = "ffprobe"
    ffmpeg_path: str = "ffmpeg"
    media_tool_timeout_seconds: int = 600

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()
