"""HTTP surface: `POST /generate`.

Contract: a non-empty `request` string always yields `200 {script, explanation}`; pipeline
failures are carried by the no-match sentinel, not by HTTP status codes. Only an empty request
(400) or an unreadable template library (500) produce errors.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI, HTTPException, Request, status
from pydantic import BaseModel

from src.app import App, create_app
from src.config.logging import configure_logging
from src.config.settings import load_settings
from src.sql.library import TemplateLibraryError

logger = logging.getLogger(__name__)

EMPTY_REQUEST_DETAIL = "Please enter a request."


class GenerateRequest(BaseModel):
    request: str = ""


class GenerateResponse(BaseModel):
    script: str
    explanation: str


def create_web_app(app: App) -> FastAPI:
    """Build the FastAPI application around an `App` container."""

    @asynccontextmanager
    async def lifespan(_web: FastAPI) -> AsyncIterator[None]:
        await app.open()
        try:
            yield
        finally:
            logger.info("shutting down")
            await app.close()

    web = FastAPI(title="SQL Script Generator", lifespan=lifespan)
    web.state.app = app

    @web.get("/health")
    def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    @web.post("/generate", response_model=GenerateResponse)
    async def generate(body: GenerateRequest, http_request: Request) -> GenerateResponse:
        if not body.request.strip():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=EMPTY_REQUEST_DETAIL)

        container: App = http_request.app.state.app
        try:
            result = await container.generate(body.request)
        except TemplateLibraryError:
            logger.exception("template library unavailable")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="template library unavailable",
            ) from None

        return GenerateResponse(script=result.script, explanation=result.explanation)

    return web


def main() -> None:
    """Run the HTTP server."""

    settings = load_settings()
    configure_logging()

    web = create_web_app(create_app(settings))
    uvicorn.run(web, host=settings.http_host, port=settings.http_port)


if __name__ == "__main__":
    main()
