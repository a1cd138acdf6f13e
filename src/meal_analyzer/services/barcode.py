"""Barcode lookup service for packaged foods."""

from dataclasses import dataclass

from meal_analyzer.adapters.openfoodfacts_client import ProductClient
from meal_analyzer.domain.barcode import DISPLAY_NUTRIMENTS, BarcodeProduct
from meal_analyzer.domain.errors import InvalidBarcodeError, ProductNotFoundError

_FOUND_STATUS = 1


@dataclass
class BarcodeService:
    """Looks up products by barcode."""

    client: ProductClient

    async def lookup(self, barcode: str) -> BarcodeProduct:
        """Return the product for a barcode or raise ProductNotFoundError."""
        cleaned = barcode.strip()
        if not cleaned.isdigit():
            raise InvalidBarcodeError(f"Invalid barcode: {barcode!r}")

        payload = await self.client.get_product(cleaned)
        product = payload.get("product")
        if payload.get("status") != _FOUND_STATUS or not isinstance(product, dict):
            raise ProductNotFoundError(cleaned)

        raw_nutriments = product.get("nutriments") or {}
        nutriments = {
            key: _to_optional_float(raw_nutriments.get(key))
            for key, _, _ in DISPLAY_NUTRIMENTS
        }
        return BarcodeProduct(
            barcode=cleaned,
            name=str(product.get("product_name") or ""),
            nutriments=nutriments,
        )


def _to_optional_float(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None
