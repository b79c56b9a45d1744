from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    DATABASE_URL: str = "sqlite:///./hirehub.db"

    # JWT Sessions
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # mobile sessions last a week
    BCRYPT_ROUNDS: int = 12

    # Application
    APP_NAME: str = "HireHub"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    BACKEND_CORS_ORIGINS: str = (
        "http://localhost:8081,"
        "http://localhost:19006,"
        "http://127.0.0.1:8081"
    )

    # Jobs & Matching
    DEFAULT_CURRENCY: str = "INR"
    MATCH_THRESHOLD: int = 20
    MATCH_LIMIT: int = 10

    # Notifications
    NOTIFICATION_BATCH_SIZE: int = 50

    # Simulated file storage
    FILE_BASE_URL: str = "https://placeholder.com/file"
    MAX_RESUME_SIZE_MB: int = 5
    MAX_IMAGE_SIZE_MB: int = 2


settings = Settings()
