"""Application settings for the combinations service."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    LOG_LEVEL: str = "INFO"

    # MySQL connection
    MYSQL_HOST: str = "localhost"
    MYSQL_PORT: int = 3306
    MYSQL_USER: str = "root"
    MYSQL_PASSWORD: str = ""
    MYSQL_DATABASE: str = "combinations"
    MYSQL_POOL_MAXSIZE: int = 10

    # Rows per multi-row INSERT when storing combinations
    COMBINATION_CHUNK_SIZE: int = 1000

    # HTTP server
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 3000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
