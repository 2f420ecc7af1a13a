from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    APP_NAME: str = "Taskdeck API"
    API_V1_PREFIX: str = "/api/v1"

    # Server
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 2022
    CORS_ORIGINS: list[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"  # or "json"

    # DB
    DATABASE_URL: str = "sqlite:///./data/taskdeck.db"
    DATABASE_ECHO: bool = False

    class Config:
        env_file = ".env"

settings = Settings()
