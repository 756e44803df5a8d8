from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    # App
    app_name: str = "Timeline"
    app_version: str = "1.0.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 62030

    # Static tree: pages under server/, uploads and timeline under server/assets/
    public_root: Path = BASE_DIR / "public"

    @field_validator("port")
    @classmethod
    def validate_port(cls, value: int) -> int:
        """Reject ports outside the TCP range"""
        if not 1 <= value <= 65535:
            raise ValueError(f"Invalid port {value}. Must be between 1 and 65535")
        return value

    @property
    def server_root(self) -> Path:
        return self.public_root / "server"

    @property
    def assets_root(self) -> Path:
        return self.server_root / "assets"

    @property
    def images_dir(self) -> Path:
        return self.assets_root / "imgs"

    @property
    def timeline_path(self) -> Path:
        return self.assets_root / "json" / "timeline.json"

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", case_sensitive=False
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
