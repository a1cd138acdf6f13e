"""Domain errors surfaced to API callers."""


class MealAnalyzerError(Exception):
    """Base error for user-facing failures."""


class MissingImageError(MealAnalyzerError):
    """Raised when an analysis request carries no image."""

    def __init__(self) -> None:
        super().__init__("No file uploaded")


class AnalysisError(MealAnalyzerError):
    """Raised when the image analysis service fails."""


class EmptyAnalysisError(MealAnalyzerError):
    """Raised when saving a meal without analysis text."""

    def __init__(self) -> None:
        super().__init__("No analysis result to save")


class InvalidBarcodeError(MealAnalyzerError):
    """Raised for barcodes that are empty or not numeric."""


class ProductNotFoundError(MealAnalyzerError):
    """Raised when the barcode lookup has no matching product."""

    def __init__(self, barcode: str) -> None:
        super().__init__("Product not found")
        self.barcode = barcode
