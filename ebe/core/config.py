# ebe/core/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Values come straight from the process environment (Docker Compose
    # passes the root .env through), so no env_file is configured here.
    model_config = SettingsConfigDict(extra="ignore")

    # The environment mode: 'local' or 'prod'
    ENV: str = "local"

    # --- Production URLs (for inside Docker) ---
    DATABASE_URL_PROD: str = ""
    REDIS_URL_PROD: str = ""

    # --- Local Development URLs (for running locally) ---
    DATABASE_URL_LOCAL: str
    REDIS_URL_LOCAL: str

    # Auth
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"

    # Ambient
    LOG_LEVEL: str = "INFO"
    RATE_LIMIT_ENABLED: bool = True
    CORS_ORIGINS: str = "http://localhost:3000"

    # Redis pub/sub channel for waiting-room transitions
    WAITING_ROOM_CHANNEL: str = "ebe.meetings.waiting-room.v1"

    # --- Dynamic Properties ---
    @property
    def DATABASE_URL(self) -> str:
        return (
            self.DATABASE_URL_LOCAL if self.ENV == "local" else self.DATABASE_URL_PROD
        )

    @property
    def REDIS_URL(self) -> str:
        return self.REDIS_URL_LOCAL if self.ENV == "local" else self.REDIS_URL_PROD

    def get_cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


# Create a single instance of the settings
settings = Settings()
