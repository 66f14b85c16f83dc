from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PUBLIC_DIR = Path(__file__).resolve().parent.parent / "public"


class Settings(BaseSettings):
    app_name: str = "Jokes API"
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: str = ""
    redis_db: int = 0
    # APP_ prefix keeps a HOST or PORT already set by the platform from moving the bind address
    app_host: str = "0.0.0.0"
    app_port: int = 8080
    # Seconds; applies to each request and to each redis socket operation
    request_timeout: float = 10.0
    shutdown_grace_period: int = 10
    index_page: Path = PUBLIC_DIR / "index.html"
    log_level: str = "INFO"
    json_logs: bool = True

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", env_ignore_empty=True)


settings = Settings()
