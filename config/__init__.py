# 📦 config/__init__.py
# ─────────────────────────────
# Runtime settings and scoring rule table

from pathlib import Path

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "MinistryCare Recommender"
    version: str = "1.2.0"
    host: str = "0.0.0.0"
    port: int = 8000
    prometheus_port: int = 0

    supabase_url: str = ""
    supabase_key: str = ""

    insert_retries: int = 3
    retry_delay: float = 1.0


settings = Settings()

MATCH_RULES_PATH = Path(__file__).resolve().parent / "match_rules.yml"


def load_match_rules(path: Path = MATCH_RULES_PATH) -> dict:
    """Load the provider scoring table (points per rule and thresholds)."""
    with open(path, "r") as f:
        return yaml.safe_load(f)
