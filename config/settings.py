from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Data ───────────────────────────────────────────────────
    data_dir: Path = Path("data/elections")
    file_pattern: str = "*.csv"

    # ── Queries ────────────────────────────────────────────────
    default_top_n: int = 10

    # ── App ────────────────────────────────────────────────────
    log_level: str = "INFO"


settings = Settings()
