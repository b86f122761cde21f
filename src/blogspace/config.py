from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8000
    debug: bool = False
    session_secret_key: str
    cors_origins: list[str] = []
    # Bootstrap administrator, created on first start when no user has this email
    admin_email: str = "admin@blogspace.local"
    admin_password: str = "admin123"
    comment_max_depth: int = 3  # Replies are accepted only below this nesting depth

    model_config = {
        "env_file": [".env"],
        "env_prefix": "BLOGSPACE_",
        "extra": "ignore",
    }
