"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from meal_analyzer.adapters.openfoodfacts_client import ProductClient
from meal_analyzer.config import Settings
from meal_analyzer.containers import AppContainer
from meal_analyzer.services.analysis import AnalysisClient, AnalysisService
from meal_analyzer.services.barcode import BarcodeService
from meal_analyzer.services.meals import SessionRegistry

ANALYSIS_TEXT = (
    "Calories: 540 kcal\n"
    "Protein: 41g\n"
    "Carbs: 38g\n"
    "Fat: 22.5g\n"
    "Tip: Swap the fries for a side salad.\n"
    "Keep the grilled chicken."
)


@dataclass
class FakeAnalysisClient(AnalysisClient):
    """Fake analysis client returning fixed text and recording calls."""

    text: str = ANALYSIS_TEXT
    calls: list[dict[str, str]] = field(default_factory=list)

    async def analyse(self, *, model: str, image_data_url: str, prompt: str) -> str:
        self.calls.append(
            {"model": model, "image_data_url": image_data_url, "prompt": prompt}
        )
        return self.text


@dataclass
class FailingAnalysisClient(AnalysisClient):
    """Analysis client that always raises."""

    error: Exception = field(default_factory=lambda: RuntimeError("quota exceeded"))

    async def analyse(self, *, model: str, image_data_url: str, prompt: str) -> str:
        raise self.error


@dataclass
class FakeProductClient(ProductClient):
    """Fake Open Food Facts client keyed by barcode."""

    products: dict[str, dict[str, object]] = field(
        default_factory=lambda: {
            "737628064502": {
                "product_name": "Thai peanut noodle kit",
                "nutriments": {
                    "energy-kcal_100g": 385,
                    "fat_100g": 7.69,
                    "proteins_100g": 9.62,
                },
            }
        }
    )
    requested: list[str] = field(default_factory=list)

    async def get_product(self, barcode: str) -> dict[str, object]:
        self.requested.append(barcode)
        product = self.products.get(barcode)
        if product is None:
            return {"status": 0, "code": barcode}
        return {"status": 1, "code": barcode, "product": product}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        openai_api_key="openai-key",
        openfoodfacts_base_url="https://off.test/api/v0",
        environment="test",
    )


@pytest.fixture
def analysis_client() -> FakeAnalysisClient:
    return FakeAnalysisClient()


@pytest.fixture
def product_client() -> FakeProductClient:
    return FakeProductClient()


@pytest.fixture
def container(
    settings: Settings,
    analysis_client: FakeAnalysisClient,
    product_client: FakeProductClient,
) -> AppContainer:
    analysis_service = AnalysisService(
        client=analysis_client,
        model=settings.openai_model,
        prompt=settings.analysis_prompt,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        analysis_service=analysis_service,
        barcode_service=BarcodeService(product_client),
        sessions=SessionRegistry(default_name=settings.default_meal_name),
        close_resources=close_resources,
    )
