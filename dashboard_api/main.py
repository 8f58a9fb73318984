"""Sensor Dashboard Service.

Ejecutar:
    uvicorn dashboard_api.main:app --port 8002
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from .endpoints import dashboard_router, health_router
from .runtime import start_runtime, stop_runtime

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    started = await start_runtime()
    logger.info("[APP] Dashboard started fetch_loop=%s", started)
    try:
        yield
    finally:
        await stop_runtime()


app = FastAPI(title="Sensor Dashboard Service", version="0.1.0", lifespan=lifespan)

app.include_router(health_router)
app.include_router(dashboard_router)


@app.get("/", response_class=PlainTextResponse)
async def index():
    return "Dashboard up!"
