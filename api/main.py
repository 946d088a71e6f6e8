"""FastAPI application for the Limousine Rates API."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import router
from limo_rates import __version__
from limo_rates.settings import settings

app = FastAPI(
    title="Limousine Rates API",
    description="Itemized reservation rates: gratuity, surcharge, tax, farm-out and deposits.",
    version=__version__,
)

# CORS: set ALLOWED_ORIGINS="*" to allow any origin
ALLOWED_ORIGINS: list[str] = settings.origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=not settings.allow_all_origins,  # credentials not allowed with wildcard
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    max_age=3600,
)

app.include_router(router)


@app.get("/")
async def root():
    return {
        "name": "Limousine Rates API",
        "version": __version__,
        "docs": "/docs",
        "health": "/api/v1/health",
    }
