"""Pydantic models for API payloads."""

from datetime import datetime

from pydantic import BaseModel

from meal_analyzer.domain.barcode import BarcodeProduct
from meal_analyzer.domain.meals import DailyTotals, MealEntry
from meal_analyzer.domain.nutrition import MacroChart, NutritionText


class AnalysisResultRequest(BaseModel):
    """Raw analysis text submitted by the client."""

    result: str


class SaveMealRequest(BaseModel):
    """Request to save an analysed meal to today's log."""

    result: str
    name: str | None = None


class NutritionTextModel(BaseModel):
    """Parsed nutrition strings."""

    calories: str
    protein: str
    carbs: str
    fat: str
    tip: str

    @classmethod
    def from_domain(cls, nutrition: NutritionText) -> "NutritionTextModel":
        return cls(
            calories=nutrition.calories,
            protein=nutrition.protein,
            carbs=nutrition.carbs,
            fat=nutrition.fat,
            tip=nutrition.tip,
        )


class MacroChartModel(BaseModel):
    """Pie chart data for macros."""

    labels: list[str]
    values: list[float]
    has_data: bool

    @classmethod
    def from_domain(cls, chart: MacroChart) -> "MacroChartModel":
        return cls(
            labels=list(chart.labels),
            values=list(chart.values),
            has_data=chart.has_data,
        )


class ParsedAnalysisResponse(BaseModel):
    """Parsed analysis with chart data."""

    nutrition: NutritionTextModel
    chart: MacroChartModel


class MealEntryModel(BaseModel):
    """Saved meal."""

    id: int
    name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    timestamp: datetime

    @classmethod
    def from_domain(cls, meal: MealEntry) -> "MealEntryModel":
        return cls(
            id=meal.id,
            name=meal.name,
            calories=meal.calories,
            protein=meal.protein,
            carbs=meal.carbs,
            fat=meal.fat,
            timestamp=meal.timestamp,
        )


class DailyTotalsModel(BaseModel):
    """Totals across saved meals."""

    calories: float
    protein: float
    carbs: float
    fat: float

    @classmethod
    def from_domain(cls, totals: DailyTotals) -> "DailyTotalsModel":
        return cls(
            calories=totals.calories,
            protein=totals.protein,
            carbs=totals.carbs,
            fat=totals.fat,
        )


class MealLogResponse(BaseModel):
    """Saved meals with their totals."""

    meals: list[MealEntryModel]
    totals: DailyTotalsModel


class BarcodeProductModel(BaseModel):
    """Barcode lookup result."""

    barcode: str
    name: str
    nutriments: dict[str, float | None]
    display: dict[str, str]

    @classmethod
    def from_domain(cls, product: BarcodeProduct) -> "BarcodeProductModel":
        return cls(
            barcode=product.barcode,
            name=product.name,
            nutriments=dict(product.nutriments),
            display=product.display_nutriments(),
        )
