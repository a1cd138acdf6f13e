"""Nutrition domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NutritionText:
    """Labeled nutrition values as they appear in analysis text."""

    calories: str = ""
    protein: str = ""
    carbs: str = ""
    fat: str = ""
    tip: str = ""


@dataclass(frozen=True)
class MacroChart:
    """Macro magnitudes prepared for a pie chart."""

    protein: float
    carbs: float
    fat: float
    labels: tuple[str, str, str] = ("Protein", "Carbs", "Fat")

    @property
    def values(self) -> tuple[float, float, float]:
        return (self.protein, self.carbs, self.fat)

    @property
    def has_data(self) -> bool:
        """Return false when every macro is zero."""
        return any(value != 0 for value in self.values)
