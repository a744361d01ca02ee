"""Configuration models and loading."""

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

CONFIG_DIR = Path.home() / ".config" / "search-proxy"
CONFIG_FILE = CONFIG_DIR / "config.json"

PUBLIC_DIR = Path(__file__).resolve().parent.parent / "public"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/116.0.5845.96 Safari/537.36"
)


class ProxySettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = True


class UpstreamSettings(BaseModel):
    user_agent: str = DEFAULT_USER_AGENT
    # None disables the timeout entirely
    timeout: float | None = None
    follow_redirects: bool = True


class RewriteSettings(BaseModel):
    marker: str = "www.google.com"
    base_url: str = "https://www.google.com"


class StaticSettings(BaseModel):
    public_dir: Path = PUBLIC_DIR


class Config(BaseModel):
    proxy: ProxySettings = Field(default_factory=ProxySettings)
    upstream: UpstreamSettings = Field(default_factory=UpstreamSettings)
    rewrite: RewriteSettings = Field(default_factory=RewriteSettings)
    static: StaticSettings = Field(default_factory=StaticSettings)


def load_config() -> Config:
    """Load configuration from JSON file, creating default if needed."""
    if not CONFIG_FILE.exists():
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        default = Config()
        CONFIG_FILE.write_text(default.model_dump_json(indent=2))
        return default

    try:
        data = json.loads(CONFIG_FILE.read_text())
        return Config.model_validate(data)
    except (json.JSONDecodeError, ValidationError):
        # Backup corrupted config and recreate default
        backup = CONFIG_FILE.with_suffix(".json.bak")
        CONFIG_FILE.rename(backup)
        default = Config()
        CONFIG_FILE.write_text(default.model_dump_json(indent=2))
        return default
