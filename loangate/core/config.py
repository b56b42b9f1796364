from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # -------------------------
    # App core settings
    # -------------------------
    APP_NAME: str = "LoanGate Banking API"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # -------------------------
    # Database
    # -------------------------
    DATABASE_URL: str = "sqlite:///./loangate.db"

    # -------------------------
    # JWT / Auth settings
    # -------------------------
    SECRET_KEY: str = "CHANGE_ME_IN_PROD"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # -------------------------
    # Banking defaults
    # -------------------------
    DEFAULT_CREDIT_SCORE: int = 550
    DEFAULT_PAGE_LIMIT: int = 10

    # -------------------------
    # Pydantic v2 config
    # -------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="forbid"
    )


# Singleton
settings = Settings()
