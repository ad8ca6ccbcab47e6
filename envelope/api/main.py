"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from envelope.models import ConstructionValidationError
from envelope.api.routes import router


async def _validation_error(request: Request, exc: ConstructionValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


def create_app() -> FastAPI:
    app = FastAPI(
        title="Straw Bale Envelope",
        description="Construction synthesis for straw bale perimeter walls",
        version="0.1.0",
    )

    # CORS: allow a local frontend dev server
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ConstructionValidationError, _validation_error)
    app.include_router(router, prefix="/api")

    return app


app = create_app()
