"""Application configuration."""
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from radio_status.models import UpstreamConfig


def _data_dir() -> Path:
    base = Path(__file__).resolve().parent.parent
    return base / "data"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="RADIO_STATUS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = 8484
    debug: bool = False

    # Shoutcast host and port, no trailing slash
    base_url: str = "http://sonicpanel.oficialserver.com:8342"
    timeout_ms: int = 5000
    user_agent: str = "RadioHabblive-Player/1.0"

    data_dir: Path = _data_dir()
    logs_dir: Path | None = None

    def __init__(self, **kwargs):  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.logs_dir = self.logs_dir or self.data_dir / "logs"

    def upstream(self) -> UpstreamConfig:
        """Frozen upstream config for the resolver."""
        return UpstreamConfig(
            base_url=self.base_url.rstrip("/"),
            timeout_seconds=self.timeout_ms / 1000,
            user_agent=self.user_agent,
        )


settings = Settings()
