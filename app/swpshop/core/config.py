from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "swpshop-backend"
    DIRECTUS_URL: str = ""
    DIRECTUS_TOKEN: str | None = None
    DIRECTUS_COLLECTION: str = "Products"
    DIRECTUS_TIMEOUT_SECONDS: float = 10.0
    PORT: int = 4000
    CORS_ORIGIN: str = "*"
    LOG_LEVEL: str = "INFO"

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGIN.split(",") if origin.strip()] or ["*"]


settings = Settings()
