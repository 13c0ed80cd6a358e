"""
Ship Maintenance API

FastAPI application providing REST endpoints for the component registry,
the maintenance scheduler and history, and the ship's stores, purchasing
and crew records.

Run with:  uvicorn main:app   (from the backend/ directory)
"""

import logging

import uvicorn

from core.app import create_app
from core.config import settings

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=settings.debug)
