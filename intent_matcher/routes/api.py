"""JSON HTTP API around the classifier.

Run with: uvicorn --factory intent_matcher.routes.api:build_app
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from intent_matcher.config import Settings, get_settings
from intent_matcher.config.settings import API_TITLE, API_VERSION
from intent_matcher.routes.models import (
    BatchClassifyRequest,
    BatchClassifyResponse,
    BatchItem,
    ClassifyRequest,
    ClassifyResponse,
    ErrorResponse,
    IntentsResponse,
    ResultPayload,
)
from intent_matcher.services.catalog_index import CatalogIndex, IndexCache
from intent_matcher.services.catalog_loader import validate_catalog
from intent_matcher.services.errors import IntentMatcherError
from intent_matcher.services.intent_classifier import (
    ClassificationOptions,
    ClassificationResult,
    get_classifier,
)

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _payload(result: ClassificationResult) -> ResultPayload:
    return ResultPayload(
        intent=result.intent,
        confidence=result.confidence,
        matched_example=result.matched_example,
    )


def _error_body(**fields: Any) -> Dict[str, Any]:
    return ErrorResponse(**fields).model_dump(exclude_none=True)


_CLIENT_ERRORS = {400: {"model": ErrorResponse, "description": "Invalid body, catalog or options"}}


def _error_details(exc: RequestValidationError) -> list[Dict[str, Any]]:
    return [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title=API_TITLE, version=API_VERSION)

    default_catalog = settings.catalog()
    classifier = get_classifier(settings.strategy)
    cache = IndexCache(max_entries=settings.index_cache_size)
    app.state.settings = settings
    app.state.index_cache = cache

    def _options(req_threshold: Optional[float], req_margin: Optional[float]) -> ClassificationOptions:
        return ClassificationOptions(
            threshold=settings.threshold if req_threshold is None else req_threshold,
            min_margin=settings.min_margin if req_margin is None else req_margin,
        )

    def _index_for(intents: Any) -> CatalogIndex:
        # Explicit null (or no field) means the default catalog
        catalog = default_catalog if intents is None else validate_catalog(intents)
        return cache.get_or_build(catalog)

    @app.exception_handler(IntentMatcherError)
    async def intent_matcher_error_handler(request: Request, exc: IntentMatcherError):
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=400, content=_error_body(error=exc.message, code=exc.code))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = _error_details(exc)
        logger.warning("Invalid request to %s: %s", request.url.path, details)
        return JSONResponse(status_code=400, content=_error_body(error="Invalid request body", details=details))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(
                status_code=404,
                content=_error_body(
                    error="Route not found",
                    message=f"The route {request.method} {request.url.path} does not exist",
                ),
            )
        return JSONResponse(status_code=exc.status_code, content=_error_body(error=str(exc.detail)))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content=_error_body(error="Internal server error", message=str(exc)))

    @app.get("/")
    async def root():
        return {
            "message": API_TITLE,
            "version": API_VERSION,
            "endpoints": {
                "POST /classify": "Classify the intent of one text (accepts intents in the body)",
                "POST /classify/batch": "Classify several texts (accepts intents in the body)",
                "GET /intents": "List the default intents",
                "GET /health": "Server health",
            },
        }

    @app.get("/health")
    async def health():
        return {"status": "ok", "timestamp": _now()}

    @app.get("/intents", response_model=IntentsResponse)
    async def intents():
        names = list(default_catalog)
        return IntentsResponse(intents=names, total=len(names))

    @app.post("/classify", response_model=ClassifyResponse, responses=_CLIENT_ERRORS)
    def classify(body: ClassifyRequest):
        index = _index_for(body.intents)
        result = classifier.classify(body.text, index, _options(body.threshold, body.min_margin))
        return ClassifyResponse(text=body.text, result=_payload(result), timestamp=_now())

    @app.post("/classify/batch", response_model=BatchClassifyResponse, responses=_CLIENT_ERRORS)
    def classify_batch(body: BatchClassifyRequest):
        index = _index_for(body.intents)
        results = classifier.classify_batch(body.texts, index, _options(body.threshold, body.min_margin))
        items = [BatchItem(text=text, result=_payload(r)) for text, r in zip(body.texts, results)]
        return BatchClassifyResponse(results=items, total=len(items), timestamp=_now())

    return app


def build_app() -> FastAPI:
    """App factory for uvicorn: loads .env, settings and logging."""
    from intent_matcher.config import configure_logging, load_env

    load_env()
    settings = get_settings()
    configure_logging(settings.log_level)
    return create_app(settings)


__all__ = ["build_app", "create_app"]
