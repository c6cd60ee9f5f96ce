from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    goalpulse_api_key: str | None = None

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"  # "console" | "json"

    # Status thresholds (percent). Only on_track is overridable per goal.
    goals_exceeded_threshold: float = 100.0
    goals_on_track_threshold: float = 80.0  # % of expected progress
    goals_behind_threshold: float = 50.0  # % of expected progress

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
