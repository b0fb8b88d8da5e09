"""FastAPI server exposing wardrobe, recommendation and feedback endpoints."""

from __future__ import annotations

import logging
import uuid
from functools import lru_cache
from typing import Any, Dict

from fastapi import FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from logic.validation import FeedbackInput, RecommendationRequestInput, WardrobeItemInput
from stylist_app.app import WardrobeStylistApp
from stylist_app.config import AppConfig
from stylist_app.logging_config import correlation_context, get_logger, log_event

LOGGER = get_logger(__name__)
CORRELATION_HEADER = "X-Correlation-ID"
_STATUS_CODES = {"ok": 200, "not_found": 404, "invalid": 400}


def _error(status_code: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=jsonable_encoder({"error": message, **extra}))


def create_app(stylist: WardrobeStylistApp | None = None, config: AppConfig | None = None) -> FastAPI:
    """Build the FastAPI application around a wired :class:`WardrobeStylistApp`."""

    stylist = stylist or WardrobeStylistApp(config=config)
    app = FastAPI(title="Wardrobe Stylist", version="0.1.0")
    app.state.stylist = stylist

    app.add_middleware(
        CORSMiddleware,
        allow_origins=stylist.config.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def correlation_middleware(request: Request, call_next):
        correlation_id = request.headers.get(CORRELATION_HEADER) or uuid.uuid4().hex
        with correlation_context(correlation_id):
            response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
        log_event(LOGGER, logging.WARNING, "request_validation_failed", error_count=len(exc.errors()))
        return _error(400, "Invalid data", details=exc.errors())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        log_event(
            LOGGER,
            logging.ERROR,
            "request_failed",
            path=request.url.path,
            method=request.method,
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        return _error(500, "Internal server error")

    def _health() -> JSONResponse:
        payload = stylist.health()
        status_code = 200 if payload["status"] == "ok" else 503
        return JSONResponse(status_code=status_code, content=payload)

    @app.get("/health", tags=["system"])
    def healthcheck() -> JSONResponse:
        """Readiness probe that also checks the database."""

        return _health()

    @app.get("/api/health", tags=["system"])
    def api_healthcheck() -> JSONResponse:
        return _health()

    @app.get("/api/wardrobe/items", tags=["wardrobe"])
    def list_items() -> list:
        return stylist.wardrobe_tools.list_wardrobe_items()

    @app.get("/api/wardrobe/items/{item_id}", tags=["wardrobe"])
    def get_item(item_id: str):
        item = stylist.wardrobe_tools.get_wardrobe_item(item_id)
        if item is None:
            return _error(404, "Item not found")
        return item

    @app.post("/api/wardrobe/items", status_code=201, tags=["wardrobe"])
    def create_item(payload: WardrobeItemInput) -> Dict[str, Any]:
        return stylist.wardrobe_tools.add_wardrobe_item(payload)

    @app.put("/api/wardrobe/items/{item_id}", tags=["wardrobe"])
    def replace_item(item_id: str, payload: WardrobeItemInput):
        item = stylist.wardrobe_tools.replace_wardrobe_item(item_id, payload)
        if item is None:
            return _error(404, "Item not found")
        return item

    @app.delete("/api/wardrobe/items/{item_id}", status_code=204, tags=["wardrobe"])
    def delete_item(item_id: str):
        if not stylist.wardrobe_tools.delete_wardrobe_item(item_id):
            return _error(404, "Item not found")
        return Response(status_code=204)

    @app.post("/api/recommendations", tags=["recommendations"])
    def recommend(payload: RecommendationRequestInput) -> Dict[str, Any]:
        """Generate up to three outfits; an empty list means the wardrobe is too small."""

        result = stylist.outfit_stylist.recommend_outfits(payload.to_domain())
        return {"outfits": result["outfits"], "request_id": result["request_id"]}

    @app.get("/api/recommendations/history", tags=["recommendations"])
    def recommendation_history() -> list:
        return stylist.feedback_agent.recommendation_history()

    @app.post("/api/feedback", status_code=201, tags=["feedback"])
    def create_feedback(payload: FeedbackInput):
        result = stylist.feedback_agent.record_feedback(payload)
        if result["status"] != "ok":
            return _error(
                _STATUS_CODES.get(result["status"], 400),
                result.get("message", "Invalid data"),
                details=result.get("details", []),
            )
        return result["feedback"]

    @app.get("/api/feedback", tags=["feedback"])
    def list_feedback() -> list:
        return stylist.feedback_agent.list_feedback()

    return app


@lru_cache
def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return create_app()


def __getattr__(name: str) -> Any:
    # Built on first access so importing this module does not open the database.
    if name == "app":
        return get_app()
    raise AttributeError(name)


if __name__ == "__main__":
    import uvicorn

    settings = AppConfig.from_env()
    uvicorn.run("server.api:app", host=settings.host, port=settings.port, reload=False)
