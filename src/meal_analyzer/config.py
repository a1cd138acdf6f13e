"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from meal_analyzer.services.analysis import ANALYSIS_PROMPT
from meal_analyzer.services.meals import DEFAULT_MEAL_NAME

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str | None = None
    openai_model: str = "gpt-4o"
    analysis_prompt: str = ANALYSIS_PROMPT
    mock_analysis: bool = False
    openfoodfacts_base_url: str = "https://world.openfoodfacts.org/api/v0"
    default_meal_name: str = DEFAULT_MEAL_NAME
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
