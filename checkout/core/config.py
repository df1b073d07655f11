from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- Required Fields ---
    PROJECT_NAME: str = "Checkout"
    DATABASE_URL: str

    # --- Optional / Default Fields ---
    PGSSL: str = ""             # "require" turns on sslmode=require
    CORS_ORIGIN: str = ""       # comma separated, empty means any origin
    PRICE_CENTS: int = 14900
    HOST: str = "127.0.0.1"
    PORT: int = 3000
    STATIC_DIR: str = ""
    LOG_LEVEL: str = "INFO"
    DB_POOL_SIZE: int = 5

    # --- Configuration ---
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGIN.split(",") if o.strip()] or ["*"]

    @property
    def ssl_required(self) -> bool:
        return self.PGSSL.strip().lower() == "require"

settings = Settings()
