"""Parsing of free-form nutrition analysis text."""

import re

from meal_analyzer.domain.nutrition import MacroChart, NutritionText

# Checked in order; a line is assigned to the first label it starts with.
_LABEL_PATTERNS: dict[str, re.Pattern[str]] = {
    field: re.compile(rf"^{field}:\s*", re.IGNORECASE)
    for field in ("calories", "protein", "carbs", "fat", "tip")
}

_NUMBER_PATTERN = re.compile(r"[0-9]+(?:\.[0-9]+)?")


def parse_nutrition_text(text: str | None) -> NutritionText:
    """Parse labeled lines such as ``Protein: 32g`` into a NutritionText.

    Labels are matched case-insensitively at the start of each trimmed line.
    A repeated label overwrites the earlier value. Once a ``Tip:`` line has
    been seen, any later non-empty line without a label is appended to the
    tip, so multi-line tips survive.
    """
    values = dict.fromkeys(_LABEL_PATTERNS, "")
    tip_seen = False
    for raw_line in (text or "").split("\n"):
        line = raw_line.strip()
        field = _match_label(line)
        if field is not None:
            values[field] = _LABEL_PATTERNS[field].sub("", line, count=1).strip()
            tip_seen = tip_seen or field == "tip"
        elif tip_seen and line:
            values["tip"] = " ".join(part for part in (values["tip"], line) if part)
    return NutritionText(**values)


def extract_numeric_value(text: str | None) -> float:
    """Return the first number in a string like ``~720 kcal``, or 0."""
    if not text:
        return 0.0
    match = _NUMBER_PATTERN.search(text)
    if match is None:
        return 0.0
    return float(match.group())


def build_macro_chart(nutrition: NutritionText) -> MacroChart:
    """Project protein, carbs and fat into chart magnitudes."""
    return MacroChart(
        protein=extract_numeric_value(nutrition.protein),
        carbs=extract_numeric_value(nutrition.carbs),
        fat=extract_numeric_value(nutrition.fat),
    )


def _match_label(line: str) -> str | None:
    for field, pattern in _LABEL_PATTERNS.items():
        if pattern.match(line):
            return field
    return None
