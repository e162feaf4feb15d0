from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session

import search_fallback.models  # noqa: F401 — register SQLModel tables

from search_fallback.config import get_settings
from search_fallback.db import create_db_and_tables, engine
from search_fallback.routers import catalog, health, items, search
from search_fallback.services.interest import InterestService
from search_fallback.services.interest_matcher import InterestMatcher
from search_fallback.services.notifications import build_dispatcher

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    create_db_and_tables()

    # Interest matcher singleton (fed by POST /api/items/created)
    dispatcher = build_dispatcher(settings)
    app.state.interest_matcher = InterestMatcher(
        engine,
        dispatcher,
        concurrency=settings.interest_notify_concurrency,
        base_url=settings.public_base_url,
    )
    logger.info("Interest notifications via %s dispatcher", dispatcher.kind)

    # Periodic reaper for interest requests past their expiry
    interest_service = InterestService(settings)

    def _expire_once() -> int:
        with Session(engine) as session:
            return interest_service.expire_stale(session)

    async def _interest_expiry_loop(interval_seconds: float) -> None:
        while True:
            await asyncio.sleep(interval_seconds)
            try:
                await asyncio.to_thread(_expire_once)
            except Exception:
                logger.exception("Interest expiry sweep error")

    expiry_task = None
    if settings.interest_expiry_sweep_minutes > 0:
        expiry_task = asyncio.create_task(
            _interest_expiry_loop(settings.interest_expiry_sweep_minutes * 60)
        )

    yield

    # Shutdown: cancel expiry reaper
    if expiry_task is not None:
        expiry_task.cancel()
        try:
            await expiry_task
        except asyncio.CancelledError:
            pass


app = FastAPI(
    title="Search Fallback",
    description="Fuzzy fallback search, adaptive ranking and notify-me matching",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        f"https://{settings.domain}",
        "http://localhost:3000",
        "http://localhost:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(search.router)
app.include_router(catalog.router)
app.include_router(items.router)
