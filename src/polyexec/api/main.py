"""
FastAPI application for the execution engine.

This module configures the FastAPI application and registers routes for
code execution, language introspection, starter templates and health
probing.  Authentication and rate limiting are left to the gateway in
front of the service.

Handlers are plain functions so FastAPI runs them on its threadpool; each
request blocks only its own worker while the program runs.
"""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException

from ..config import Config
from ..engine import Backend, ExecutionEngine
from ..errors import (
    RemoteExecutionError,
    ToolchainUnavailableError,
    UnsupportedLanguageError,
    WorkspaceError,
)
from ..executor import ExecutionRequest
from ..languages import normalize_id
from ..models import (
    ExecuteRequest,
    ExecuteResponse,
    HealthResponse,
    LanguageInfo,
    LanguagesResponse,
    TemplatesResponse,
)
from ..templates import get_templates


logger = logging.getLogger("polyexec")

if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter("[polyexec] %(levelname)s - %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)

logger.setLevel(logging.INFO)


config = Config.from_env()

logger.info(
    "Loaded config: backend=%s, workspace_path=%s, timeout=%ss, max_output_bytes=%s",
    config.backend,
    config.workspace_path,
    config.timeout_seconds,
    config.max_output_bytes,
)

WORKSPACE_BASE = Path(config.workspace_path)
try:
    WORKSPACE_BASE.mkdir(parents=True, exist_ok=True)
except OSError:
    logger.warning("Unable to create workspace dir %s; continuing", WORKSPACE_BASE)

engine = ExecutionEngine.from_config(config)


app = FastAPI(title="Polyglot Execution Service", version="0.1.0")


@app.middleware("http")
async def log_requests(request, call_next):
    """Log every request and its status code."""
    path = request.url.path
    method = request.method
    client = getattr(request.client, "host", "unknown")

    logger.info("Incoming request: %s %s from %s", method, path, client)
    response = await call_next(request)
    logger.info("Response: %s %s -> %s", method, path, response.status_code)
    return response


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    """Report whether the configured backend can accept work."""
    availability = engine.check_availability(Backend(config.backend))
    return HealthResponse(available=availability.available, detail=availability.detail)


@app.get("/languages", response_model=LanguagesResponse)
def languages() -> LanguagesResponse:
    """List every language the engine knows how to run."""
    entries = [LanguageInfo.model_validate(item) for item in engine.list_supported_languages()]
    return LanguagesResponse(languages=entries, count=len(entries))


@app.get("/templates/{language}", response_model=TemplatesResponse)
def templates(language: str) -> TemplatesResponse:
    """Return starter snippets for ``language``."""
    found = get_templates(language)
    if found is None:
        raise HTTPException(status_code=404, detail=f"Templates not found for language: {language}")
    return TemplatesResponse(language=normalize_id(language), templates=found)


@app.post("/execute", response_model=ExecuteResponse)
def execute(req: ExecuteRequest) -> ExecuteResponse:
    """Run a code snippet and return its normalized result.

    Failures of the program itself (compile errors, non‑zero exit,
    timeouts) come back as ``success: false`` with status 200.  Error
    statuses are reserved for unknown languages and infrastructure faults.
    """
    logger.info("[/execute] Executing %s code (%d chars)", req.language, len(req.code))
    request = ExecutionRequest(code=req.code, language=req.language, stdin=req.stdin)

    try:
        result = engine.execute(request, Backend(config.backend))
    except UnsupportedLanguageError as exc:
        logger.warning("[/execute] %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))
    except (ToolchainUnavailableError, RemoteExecutionError) as exc:
        logger.error("[/execute] Backend unavailable: %s", exc)
        raise HTTPException(status_code=503, detail=str(exc))
    except WorkspaceError as exc:
        logger.exception("[/execute] Workspace failure: %s", exc)
        raise HTTPException(status_code=500, detail="Execution error")

    logger.info(
        "[/execute] Execution complete: %s (%sms)",
        "Success" if result.success else "Failed",
        result.execution_time_ms,
    )
    return ExecuteResponse.from_result(result)
