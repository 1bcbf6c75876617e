from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Investment Onboarding API"
    debug: bool = False
    log_level: str = "INFO"

    database_url: str = "sqlite+aiosqlite:///./investment_platform.db"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    bcrypt_rounds: int = 10

    upload_dir: str = "./uploads"

    # Task writes share the application's transaction when true; when false
    # they are best-effort follow-ups and failures are only logged.
    atomic_workflow_writes: bool = True
    allow_status_reopen: bool = True

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
