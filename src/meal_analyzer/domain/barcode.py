"""Domain models for packaged food lookups."""

from dataclasses import dataclass, field

MISSING_VALUE = "N/A"

DISPLAY_NUTRIMENTS: tuple[tuple[str, str, str], ...] = (
    ("energy-kcal_100g", "Calories/100g", "kcal"),
    ("fat_100g", "Fat", "g"),
    ("sugars_100g", "Sugars", "g"),
    ("proteins_100g", "Protein", "g"),
)


@dataclass(frozen=True)
class BarcodeProduct:
    """Product found by barcode with per-100g nutriments."""

    barcode: str
    name: str
    nutriments: dict[str, float | None] = field(default_factory=dict)

    def display_nutriments(self) -> dict[str, str]:
        """Return labeled nutriment values, using N/A for missing ones."""
        display: dict[str, str] = {}
        for key, label, unit in DISPLAY_NUTRIMENTS:
            value = self.nutriments.get(key)
            if value is None:
                display[label] = MISSING_VALUE
            else:
                display[label] = f"{value:g} {unit}"
        return display
