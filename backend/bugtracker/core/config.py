# backend/bugtracker/core/config.py

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_env: str = "dev"

    database_url: str = "sqlite:///./bugtracker.db"

    # bootstrap account, created on first run if missing
    admin_username: str = "admin"
    admin_password: str = "admin123"

    jwt_secret_key: str = "dev-secret-change-me"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 10080

    # comma-separated allowlist, e.g. "https://tracker.example.com,http://localhost:3000"
    cors_origins: str = "http://localhost:3000"

    log_level: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
