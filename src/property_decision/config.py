from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    savings_horizon_months: int = 600      # one horizon for both savings strategies
    default_inflation_pct: float = 6.0
    appreciation_rate: float = 0.05        # annual property appreciation (fraction)
    timeline_cap_months: int = 120
    currency_symbol: str = "R"
    snapshot_path: Path = Path("~/.property_decision/snapshots.json")
    snapshot_key: str = "property_inputs"

    model_config = SettingsConfigDict(
        env_prefix="PROPERTY_DECISION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
