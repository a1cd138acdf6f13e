"""Meal photo analysis service using LLMs."""

import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from meal_analyzer.domain.errors import AnalysisError, MissingImageError

ANALYSIS_PROMPT = (
    "Analyse this image. If it's a photo of food or a macro tracking "
    "screenshot, estimate calories/macros and give one tip for improvement. "
    "Answer with one value per line using exactly these labels: "
    "Calories:, Protein:, Carbs:, Fat:, Tip:."
)

SAMPLE_ANALYSIS_RESULT = (
    "Calories: ~720 kcal\n"
    "Protein: 32g\n"
    "Carbs: 65g\n"
    "Fat: 28g\n"
    "Tip: Balance this meal with more veggies to improve fibre and reduce "
    "overall fat."
)

_logger = logging.getLogger(__name__)


class AnalysisClient(Protocol):
    """Interface for LLM image analysis returning free-form text."""

    async def analyse(self, *, model: str, image_data_url: str, prompt: str) -> str:
        """Return the model's text answer for an image."""


@dataclass
class AnalysisService:
    """Service that sends meal photos for analysis."""

    client: AnalysisClient | None
    model: str
    prompt: str = ANALYSIS_PROMPT
    mock: bool = False

    async def analyse(self, image_bytes: bytes) -> str:
        """Return nutrition analysis text for an image."""
        if not image_bytes:
            raise MissingImageError
        if self.mock:
            _logger.info("Mocking analysis for image (bytes=%s)", len(image_bytes))
            return SAMPLE_ANALYSIS_RESULT
        if self.client is None:
            raise AnalysisError("Analysis client is not configured")

        data_url = _to_data_url(image_bytes)
        try:
            text = await self.client.analyse(
                model=self.model,
                image_data_url=data_url,
                prompt=self.prompt,
            )
        except Exception as exc:
            raise AnalysisError(str(exc) or type(exc).__name__) from exc
        if not text or not text.strip():
            raise AnalysisError("Analysis service returned an empty response")
        return text


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
