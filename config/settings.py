"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration from environment variables."""

    app_title: str = "Nigeria PAYE Tax API"
    log_level: str = "INFO"
    # YAML file of extra deduction rules, relative to config/ or absolute
    deduction_rules_file: str = ""
    scenarios_file: str = "scenarios.yaml"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
