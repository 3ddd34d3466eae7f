"""FastAPI application entrypoint for virejo service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .. import __version__
from ..config import ConfigError
from ..orchestrator import GenerateOutcome, Orchestrator, UnsupportedFileError


class SourceRequest(BaseModel):
    content: str
    file_path: str


class AnalyzeResponse(BaseModel):
    analysis: Dict[str, Any]


class RenderResponse(BaseModel):
    test_path: str
    content: str


class GenerateRequest(BaseModel):
    path: str
    force: bool = False
    dry_run: bool = False


class GenerateResponse(BaseModel):
    status: str
    test_path: Optional[str] = None
    content: Optional[str] = None
    written: Optional[bool] = None


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing virejo operations."""

    app = FastAPI(title="Virejo Service", version=__version__)

    async def get_orchestrator() -> Orchestrator:
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/analyze", response_model=AnalyzeResponse)
    async def analyze_source(
        payload: SourceRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> AnalyzeResponse:
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(
            None, orchestrator.analyze_source, payload.content, payload.file_path
        )
        return AnalyzeResponse(analysis=result.to_dict())

    @app.post("/render", response_model=RenderResponse)
    async def render_source(
        payload: SourceRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> RenderResponse:
        loop = asyncio.get_running_loop()
        outcome = await loop.run_in_executor(
            None, orchestrator.render_source, payload.content, payload.file_path
        )
        return RenderResponse(test_path=str(outcome.path), content=outcome.content)

    @app.post("/generate", response_model=GenerateResponse)
    async def generate_test_file(
        payload: GenerateRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> GenerateResponse:
        def _run_generate() -> GenerateOutcome | None:
            return orchestrator.run_generate(
                payload.path, force=payload.force, dry_run=payload.dry_run
            )

        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, _run_generate)

        if result is None:
            return GenerateResponse(status="skipped")

        return GenerateResponse(
            status="ok",
            test_path=str(result.path),
            content=result.content,
            written=result.written,
        )

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(UnsupportedFileError)
    async def unsupported_file_handler(_: Any, exc: UnsupportedFileError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(FileExistsError)
    async def file_exists_handler(_: Any, exc: FileExistsError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    app = create_app()
    uvicorn.run(app, host=host, port=port)
