"""Application configuration loaded from environment variables."""

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Route destinations are named indirectly by env var, so .env must reach os.environ too.
load_dotenv()


class Settings(BaseSettings):
    """Application settings with environment variable loading and sensible defaults."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "github-discord-relay"
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8080

    webhook_secret: str = ""
    repository_url: str = "https://github.com"
    # Subpath -> name of the env var holding the Discord webhook URL.
    webhook_routes: dict[str, str] = {"/": "DISCORD_WEBHOOK_URL"}
    delivery_timeout: float = 5.0


settings = Settings()
