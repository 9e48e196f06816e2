from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    ENV: str = "local"
    DB_PATH: str = "gym_progress.db"
    DB_TIMEOUT_SECONDS: float = 5.0
    LOG_LEVEL: str = "INFO"

    # Comma separated, relax for local dev
    ALLOW_ORIGINS: str = "*"
    API_VERSION: str = "dev"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def DATABASE_URL(self) -> str:
        return f"sqlite:///{self.DB_PATH}"

@lru_cache
def get_settings() -> Settings:
    return Settings()
