"""FastAPI application entrypoint for aquin service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Literal, Optional, TypeVar

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel

from ..bundle import bundle_filename, serialize_bundle
from ..config import compile_dir_patterns
from ..errors import ConfigError
from ..logging import get_logger
from ..models import ProcessedEntry, ProcessOptions
from ..pipeline import process_path
from ..processor import process_directory, process_file

logger = get_logger("service")

T = TypeVar("T")


class ProcessRequest(BaseModel):
    path: Optional[str] = None
    type: Optional[str] = None
    include_extensions: List[str] = []
    exclude_extensions: List[str] = []
    exclude_dirs: List[str] = []


class BundleRequest(BaseModel):
    path: Optional[str] = None
    include_extensions: List[str] = []
    exclude_extensions: List[str] = []
    exclude_dirs: List[str] = []


class HealthResponse(BaseModel):
    status: Literal["ok"]


class _BadRequest(ValueError):
    """Raised for requests that are well-formed JSON but unusable."""


def _options(payload: ProcessRequest | BundleRequest) -> ProcessOptions:
    try:
        patterns = compile_dir_patterns(payload.exclude_dirs)
    except ConfigError as exc:
        raise _BadRequest(str(exc)) from exc
    return ProcessOptions(
        include_extensions=tuple(payload.include_extensions),
        exclude_extensions=tuple(payload.exclude_extensions),
        exclude_dirs=patterns,
    )


async def _run_blocking(func: Callable[[], T]) -> T:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, func)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app() -> FastAPI:
    """Create the FastAPI application exposing aquin processing."""

    app = FastAPI(title="Aquin Service", version="1.0.0")

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/process-files")
    async def process_files(payload: ProcessRequest) -> Any:
        if not payload.path:
            return _error(400, "Path is required")
        if payload.type not in {"dir", "file"}:
            return _error(400, "Invalid type")
        try:
            options = _options(payload)
        except _BadRequest as exc:
            return _error(400, str(exc))

        path = payload.path
        logger.info("Processing %s (%s)", path, payload.type)

        def _run() -> Any:
            if payload.type == "dir":
                return [entry.to_dict() for entry in process_directory(path, options)]
            return process_file(path, options).to_dict()

        try:
            return await _run_blocking(_run)
        except Exception as exc:
            logger.error("Processing failed for %s: %s", path, exc)
            return _error(500, str(exc) or "Processing failed")

    @app.post("/bundle")
    async def bundle(payload: BundleRequest) -> Any:
        if not payload.path:
            return _error(400, "Path is required")
        try:
            options = _options(payload)
        except _BadRequest as exc:
            return _error(400, str(exc))

        path = payload.path

        def _run() -> List[ProcessedEntry]:
            return process_path(path, options)

        try:
            entries = await _run_blocking(_run)
        except Exception as exc:
            logger.error("Bundling failed for %s: %s", path, exc)
            return _error(500, str(exc) or "Processing failed")

        filename = bundle_filename()
        return PlainTextResponse(
            serialize_bundle(entries),
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        _: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error(400, "Invalid request body")

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)
