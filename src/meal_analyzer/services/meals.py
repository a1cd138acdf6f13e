"""In-memory meal log and daily totals."""

import logging
import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from meal_analyzer.domain.errors import EmptyAnalysisError
from meal_analyzer.domain.meals import DailyTotals, MealEntry
from meal_analyzer.domain.nutrition import NutritionText
from meal_analyzer.services.nutrition import (
    extract_numeric_value,
    parse_nutrition_text,
)

DEFAULT_MEAL_NAME = "AI Analyzed Meal"
DEFAULT_SESSION_ID = "default"

_logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def build_meal_entry(
    nutrition: NutritionText, *, name: str, timestamp: datetime, meal_id: int
) -> MealEntry:
    """Create a meal entry from parsed nutrition text."""
    return MealEntry(
        id=meal_id,
        name=name,
        calories=extract_numeric_value(nutrition.calories),
        protein=extract_numeric_value(nutrition.protein),
        carbs=extract_numeric_value(nutrition.carbs),
        fat=extract_numeric_value(nutrition.fat),
        timestamp=timestamp,
    )


def compute_daily_totals(meals: Iterable[MealEntry]) -> DailyTotals:
    """Sum calories and macros across meals."""
    entries = list(meals)
    return DailyTotals(
        calories=math.fsum(meal.calories for meal in entries),
        protein=math.fsum(meal.protein for meal in entries),
        carbs=math.fsum(meal.carbs for meal in entries),
        fat=math.fsum(meal.fat for meal in entries),
    )


@dataclass
class MealLog:
    """Append-only list of meals saved during one session."""

    default_name: str = DEFAULT_MEAL_NAME
    clock: Callable[[], datetime] = _utc_now
    _entries: list[MealEntry] = field(default_factory=list, init=False, repr=False)

    @property
    def meals(self) -> tuple[MealEntry, ...]:
        """Return saved meals in the order they were added."""
        return tuple(self._entries)

    def save_from_analysis(self, result: str, name: str | None = None) -> MealEntry:
        """Parse analysis text and append the resulting meal."""
        if not result or not result.strip():
            raise EmptyAnalysisError
        return self.add(parse_nutrition_text(result), name=name)

    def add(self, nutrition: NutritionText, name: str | None = None) -> MealEntry:
        """Append a meal built from parsed nutrition text."""
        timestamp = self.clock()
        entry = build_meal_entry(
            nutrition,
            name=(name or "").strip() or self.default_name,
            timestamp=timestamp,
            meal_id=self._next_id(timestamp),
        )
        self._entries.append(entry)
        _logger.info(
            "Meal saved: id=%s calories=%s meals=%s",
            entry.id,
            entry.calories,
            len(self._entries),
        )
        return entry

    def totals(self) -> DailyTotals:
        """Return totals over the meals currently in the log."""
        return compute_daily_totals(self._entries)

    def clear(self) -> None:
        """Drop all saved meals."""
        self._entries.clear()

    def _next_id(self, timestamp: datetime) -> int:
        candidate = int(timestamp.timestamp() * 1000)
        if self._entries and candidate <= self._entries[-1].id:
            return self._entries[-1].id + 1
        return candidate


@dataclass
class SessionRegistry:
    """Holds one meal log per client session."""

    default_name: str = DEFAULT_MEAL_NAME
    _logs: dict[str, MealLog] = field(default_factory=dict, init=False, repr=False)

    def find(self, session_id: str | None) -> MealLog | None:
        """Return the meal log for a session if one has been started."""
        return self._logs.get(_session_key(session_id))

    def get_or_create(self, session_id: str | None) -> MealLog:
        """Return the meal log for a session, creating it on first save."""
        key = _session_key(session_id)
        log = self._logs.get(key)
        if log is None:
            log = MealLog(default_name=self.default_name)
            self._logs[key] = log
        return log

    def save_from_analysis(
        self, session_id: str | None, result: str, name: str | None = None
    ) -> MealEntry:
        """Save a meal to a session, starting the session on first save."""
        if not result or not result.strip():
            raise EmptyAnalysisError
        return self.get_or_create(session_id).save_from_analysis(result, name=name)

    def discard(self, session_id: str | None) -> None:
        """Forget a session and its meals."""
        self._logs.pop(_session_key(session_id), None)

    def __len__(self) -> int:
        return len(self._logs)


def _session_key(session_id: str | None) -> str:
    return (session_id or "").strip() or DEFAULT_SESSION_ID
