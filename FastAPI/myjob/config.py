from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Required from environment (.env / deployment secrets)
    database_url: str
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int | None = None  # None = access tokens never expire
    refresh_token_expire_days: int = 7
    app_env: str = "development"  # development, staging, production

    # CORS origins as comma-separated values
    # Example: "https://app.example.com,https://admin.example.com"
    cors_allow_origins: str = "http://localhost:3000"

    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # Listing pagination
    default_page_size: int = 10
    max_page_size: int = 100

    # Job posts
    job_post_default_status: int = 1  # 1 pending, 2 not approved, 3 published
    slug_max_attempts: int = 5

    # Request guards
    rate_limit_auth_per_min: int = 20

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
