"""
FastAPI application — REST adapter for the Solana agent chat service.

Usage:
    python run_api.py

Or directly:
    uvicorn adapters.rest.app:app --host 0.0.0.0 --port 3000
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

# Ensure src/ is on sys.path when invoked via uvicorn directly
_src_dir = Path(__file__).resolve().parent.parent.parent
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from infrastructure.config import Settings
from factory import ServiceFactory
from adapters.rest.dependencies import set_chat_service
from adapters.rest.routers import chat
from adapters.rest.schemas import HealthOut

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Validate configuration and create the session controller on startup.

    The agent itself is bound lazily on the first chat request.
    """
    config = Settings.from_env()
    config.validate()
    factory = ServiceFactory(config)
    set_chat_service(factory.create_chat_session_service())
    logger.info(
        "Chat service ready (provider=%s, model=%s)",
        config.llm_provider, config.active_llm_model,
    )
    yield
    set_chat_service(None)
    await factory.aclose()


app = FastAPI(
    title="Solana Agent Chat",
    version="0.1.0",
    description="Chat with an LLM agent that can act on the Solana blockchain.",
    lifespan=lifespan,
)

# CORS: permissive, the service sits behind a browser UI
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(chat.router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Malformed chat bodies (non-JSON, non-string message) get the same 400
    # as an empty message.
    logger.info("Rejected request to %s: %s", request.url.path, exc.errors())
    return chat.error_response(status.HTTP_400_BAD_REQUEST, chat.MESSAGE_REQUIRED)


@app.get("/api/health", response_model=HealthOut, tags=["health"])
async def health():
    return HealthOut(status="ok")
