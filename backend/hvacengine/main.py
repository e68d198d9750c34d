"""
HVAC process engine: FastAPI application entry point.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hvacengine.api.router import router
from hvacengine.config import CORS_ORIGINS

app = FastAPI(
    title="HVAC Process Engine API",
    description="Psychrometric heating, cooling and mixing processes for HVAC design",
    version="0.1.0",
)

# CORS only for explicitly configured frontends
if CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )

app.include_router(router)


@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "hvac-process-engine"}
