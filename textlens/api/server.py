"""
TextLens HTTP API
=================

Endpoints:
- POST /api/analyze     -> analyze text, persist, return the record (201)
- GET  /api/analyses    -> most recent analyses (?limit=1..100, default 50)
- GET  /api/search      -> tag / full-text lookup (?query=...)
- GET  /health          -> liveness

Usage:
    uvicorn textlens.api.server:app --reload
"""
import traceback
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from textlens.core.errors import ValidationError
from textlens.core.pipeline.orchestrator import AnalysisPipeline
from textlens.core.pipeline.services import Services
from textlens.core.storage.port import DEFAULT_LIMIT


MAX_TEXT_LENGTH = 50_000
MIN_LIMIT = 1
MAX_LIMIT = 100


class AnalyzeRequest(BaseModel):
    text: str


def _error(status_code: int, error: str, details: Optional[str] = None) -> JSONResponse:
    body = {"error": error}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


def text_length(text: str) -> int:
    # UTF-16 code units: astral characters count twice
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def validate_text(text: str) -> None:
    if len(text) < 1:
        raise ValidationError("Text cannot be empty")
    if text_length(text) > MAX_TEXT_LENGTH:
        raise ValidationError("Text is too long")


def parse_limit(raw: Optional[str]) -> int:
    if raw is None or raw == "":
        return DEFAULT_LIMIT

    try:
        limit = int(raw)
    except ValueError:
        limit = None

    if limit is None or limit < MIN_LIMIT or limit > MAX_LIMIT:
        raise ValidationError(
            f"Invalid limit parameter. Must be between {MIN_LIMIT} and {MAX_LIMIT}."
        )
    return limit


def create_app(services: Optional[Services] = None) -> FastAPI:
    """
    Build the API. Without injected services they are built from the
    environment on startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if services is None:
            from textlens.app.factory import build_services

            print("[*] Initializing services from environment")
            app.state.services = build_services()
        else:
            app.state.services = services

        app.state.pipeline = AnalysisPipeline(app.state.services)
        print("[*] TextLens API ready.")

        yield

        print("[*] Shutting down.")

    app = FastAPI(
        title="TextLens API",
        version="0.1.0",
        description="Text metadata extraction and search",
        lifespan=lifespan,
    )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return _error(400, message)

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    @app.post("/api/analyze")
    def analyze(payload: AnalyzeRequest, request: Request):
        try:
            validate_text(payload.text)
            analysis = request.app.state.pipeline.analyze(payload.text)
        except ValidationError as e:
            return _error(400, str(e))
        except Exception as e:
            print(f"❌ Unexpected error in /api/analyze: {e}")
            traceback.print_exc()
            return _error(500, "An unexpected error occurred", str(e))

        return JSONResponse(status_code=201, content=analysis.to_dict())

    @app.get("/api/analyses")
    def list_analyses(request: Request, limit: Optional[str] = None):
        try:
            parsed_limit = parse_limit(limit)
        except ValidationError as e:
            return _error(400, str(e))

        try:
            analyses = request.app.state.services.store.list_recent(parsed_limit)
        except Exception as e:
            print(f"❌ Error fetching analyses: {e}")
            return _error(500, "Failed to fetch analyses", str(e))

        return [a.to_dict() for a in analyses]

    @app.get("/api/search")
    def search(request: Request, query: Optional[str] = None):
        store = request.app.state.services.store

        try:
            if not query or not query.strip():
                results = store.list_recent(DEFAULT_LIMIT)
            else:
                results = store.search(query.strip())
        except Exception as e:
            print(f"❌ Search error: {e}")
            return _error(500, "Failed to search analyses", str(e))

        return [a.to_dict() for a in results]

    return app


app = create_app()
