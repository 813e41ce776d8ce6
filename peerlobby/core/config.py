from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    ENV: str = "development"
    HOST: str = "0.0.0.0"
    PORT: int = 9000
    LOG_LEVEL: str = "INFO"

    CLEANUP_ENABLED: bool = True
    CLEANUP_INTERVAL_SECONDS: float = 300        # 5 minutes between sweeps
    PARTICIPANT_TIMEOUT_SECONDS: float = 1800    # evict after 30 minutes

    CORS_ORIGINS: list[str] = ["http://localhost:3000"]
    CORS_ORIGIN_REGEX: str | None = r"https://.*\.(onrender\.com|vercel\.app|netlify\.app)$"

    @property
    def is_production(self) -> bool:
        return self.ENV.lower() == "production"


settings = Settings()
