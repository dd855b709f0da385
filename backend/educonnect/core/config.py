from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "EduConnect API"
    APP_VERSION: str = "0.1.0"

    DATABASE_URL: str = "postgresql+psycopg2://educonnect:educonnect@db:5432/educonnect"

    # Auth
    JWT_SECRET: str = "changethis"  # Should be changed in .env
    JWT_EXPIRES_SECONDS: int = 3600  # 1 hour
    # Admins are created by seed.py; open admin sign-up only for local setups.
    ALLOW_ADMIN_REGISTRATION: bool = False

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["*"]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
