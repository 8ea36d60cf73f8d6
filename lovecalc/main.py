"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lovecalc.config import settings
from lovecalc.core.session_engine import SessionEngine
from lovecalc.services.llm_service import love_message_service

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: one session per running instance
    app.state.engine = SessionEngine(
        love_message_service, tick_interval=settings.PROGRESS_TICK_MS / 1000
    )
    yield
    # Shutdown: stop the timer and any outstanding message request
    await app.state.engine.aclose()


app = FastAPI(
    title="Love Calculator API",
    description="Backend API for the Love Calculator - what does fate say about your love?",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Routes ---
from lovecalc.api.routes import session  # noqa: E402
from lovecalc.api.websocket import session_ws  # noqa: E402

app.include_router(session.router, prefix="/api/session", tags=["session"])
app.include_router(session_ws.router, tags=["websocket"])


@app.get("/health")
async def health_check():
    return {"status": "ok"}
