"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, File, Header, Request, UploadFile, status
from fastapi.responses import JSONResponse

from meal_analyzer.api.schemas import (
    AnalysisResultRequest,
    BarcodeProductModel,
    DailyTotalsModel,
    MacroChartModel,
    MealEntryModel,
    MealLogResponse,
    NutritionTextModel,
    ParsedAnalysisResponse,
    SaveMealRequest,
)
from meal_analyzer.app_logging import configure_logging
from meal_analyzer.containers import AppContainer
from meal_analyzer.domain.errors import (
    EmptyAnalysisError,
    InvalidBarcodeError,
    MissingImageError,
    ProductNotFoundError,
)
from meal_analyzer.services.meals import (
    MealLog,
    SessionRegistry,
    compute_daily_totals,
)
from meal_analyzer.services.nutrition import build_macro_chart, parse_nutrition_text


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/api/analyse", response_model=None)
    async def analyse(
        request: Request, file: UploadFile | None = File(default=None)
    ) -> dict[str, str] | JSONResponse:
        """Analyse an uploaded meal photo and return the raw result text."""
        state_container: AppContainer = request.app.state.container
        image_bytes = await file.read() if file is not None else b""
        try:
            result = await state_container.analysis_service.analyse(image_bytes)
        except MissingImageError as exc:
            return _error(status.HTTP_400_BAD_REQUEST, str(exc))
        except Exception as exc:
            logger.exception(
                "Image analysis failed",
                extra={"upload_filename": file.filename if file else None},
            )
            return _error(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                _format_error(state_container, exc, "Failed to analyse image"),
            )
        return {"result": result}

    @app.post("/api/parse")
    async def parse(payload: AnalysisResultRequest) -> ParsedAnalysisResponse:
        """Parse analysis text into nutrition fields and chart data."""
        nutrition = parse_nutrition_text(payload.result)
        return ParsedAnalysisResponse(
            nutrition=NutritionTextModel.from_domain(nutrition),
            chart=MacroChartModel.from_domain(build_macro_chart(nutrition)),
        )

    @app.get("/api/meals")
    async def list_meals(
        request: Request, x_session_id: str | None = Header(default=None)
    ) -> MealLogResponse:
        """Return today's meals and totals for the session."""
        return _meal_log_response(_sessions(request).find(x_session_id))

    @app.post("/api/meals", response_model=None)
    async def save_meal(
        payload: SaveMealRequest,
        request: Request,
        x_session_id: str | None = Header(default=None),
    ) -> MealEntryModel | JSONResponse:
        """Save an analysed meal to the session log."""
        try:
            meal = _sessions(request).save_from_analysis(
                x_session_id, payload.result, name=payload.name
            )
        except EmptyAnalysisError as exc:
            return _error(status.HTTP_400_BAD_REQUEST, str(exc))
        return MealEntryModel.from_domain(meal)

    @app.delete("/api/meals")
    async def clear_meals(
        request: Request, x_session_id: str | None = Header(default=None)
    ) -> MealLogResponse:
        """Clear the session log."""
        _sessions(request).discard(x_session_id)
        return _meal_log_response(None)

    @app.get("/api/barcode/{barcode}", response_model=None)
    async def barcode_lookup(
        barcode: str, request: Request
    ) -> BarcodeProductModel | JSONResponse:
        """Look up a packaged food by barcode."""
        state_container: AppContainer = request.app.state.container
        try:
            product = await state_container.barcode_service.lookup(barcode)
        except InvalidBarcodeError as exc:
            return _error(status.HTTP_400_BAD_REQUEST, str(exc))
        except ProductNotFoundError as exc:
            return _error(status.HTTP_404_NOT_FOUND, str(exc))
        except Exception as exc:
            logger.exception("Barcode lookup failed", extra={"barcode": barcode})
            return _error(
                status.HTTP_502_BAD_GATEWAY, str(exc) or type(exc).__name__
            )
        return BarcodeProductModel.from_domain(product)

    return app


def _sessions(request: Request) -> SessionRegistry:
    state_container: AppContainer = request.app.state.container
    return state_container.sessions


def _meal_log_response(meal_log: MealLog | None) -> MealLogResponse:
    meals = meal_log.meals if meal_log is not None else ()
    return MealLogResponse(
        meals=[MealEntryModel.from_domain(meal) for meal in meals],
        totals=DailyTotalsModel.from_domain(compute_daily_totals(meals)),
    )


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _format_error(state_container: AppContainer, exc: Exception, fallback: str) -> str:
    """Return a user-facing error message with local debug info."""
    if state_container.settings.environment == "local":
        detail = f"{type(exc).__name__}: {exc}".strip()
        if detail:
            return f"{fallback} (debug: {detail})"
    return fallback
