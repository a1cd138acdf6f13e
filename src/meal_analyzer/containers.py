"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from meal_analyzer.adapters.openai_analysis_client import OpenAIAnalysisClient
from meal_analyzer.adapters.openfoodfacts_client import HttpxOpenFoodFactsClient
from meal_analyzer.config import Settings
from meal_analyzer.services.analysis import AnalysisService
from meal_analyzer.services.barcode import BarcodeService
from meal_analyzer.services.meals import SessionRegistry


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    analysis_service: AnalysisService
    barcode_service: BarcodeService
    sessions: SessionRegistry
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    openai_client = (
        OpenAIAnalysisClient.create(resolved_settings.openai_api_key)
        if resolved_settings.openai_api_key
        else None
    )
    analysis_service = AnalysisService(
        client=openai_client,
        model=resolved_settings.openai_model,
        prompt=resolved_settings.analysis_prompt,
        mock=resolved_settings.mock_analysis,
    )
    product_client = HttpxOpenFoodFactsClient.create(
        resolved_settings.openfoodfacts_base_url
    )
    barcode_service = BarcodeService(product_client)
    sessions = SessionRegistry(default_name=resolved_settings.default_meal_name)

    async def close_resources() -> None:
        await product_client.close()
        if openai_client is not None:
            await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        analysis_service=analysis_service,
        barcode_service=barcode_service,
        sessions=sessions,
        close_resources=close_resources,
    )
