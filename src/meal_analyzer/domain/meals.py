"""Domain models for meal logging."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class MealEntry:
    """A meal committed to the daily log."""

    id: int
    name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    timestamp: datetime


@dataclass(frozen=True)
class DailyTotals:
    """Daily total macros."""

    calories: float
    protein: float
    carbs: float
    fat: float
