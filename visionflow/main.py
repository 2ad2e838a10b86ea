"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from visionflow.config import settings
from visionflow.engine.analysis import AnalysisError

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.visionflow_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="VisionFlow Patterns",
        description="Pattern geometry and taxonomy engine for AI-detected visual patterns",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AnalysisError, _analysis_error_handler)

    from visionflow.api.router import api_router

    app.include_router(api_router)

    return app


async def _analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "code": exc.code},
    )


app = create_app()
