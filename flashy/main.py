from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi import _rate_limit_exceeded_handler

from .settings import settings
from .routers import deck, sessions, export

# ---------- logging ----------
logger.remove()
logger.add(
    lambda msg: print(msg, end=""),
    format="{time:YYYY-MM-DD HH:mm:ss} | {level:<8} | {message}",
    level=settings.LOG_LEVEL,
)

# ---------- app / limiter ----------
limiter = Limiter(key_func=get_remote_address, default_limits=[settings.RATE_LIMIT])
app = FastAPI(title="Flashy API", version="1.0.0")
app.state.limiter = limiter

# ---------- CORS ----------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*", "Content-Type", "X-Requested-With"],
)

# SlowAPI middleware + handler
app.add_middleware(SlowAPIMiddleware)
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# ---------- health ----------
@app.get("/health")
def health():
    return {
        "ok": True,
        "sessions": len(sessions.store),
        "rate_limit": settings.RATE_LIMIT,
        "max_source_kb": settings.MAX_SOURCE_KB,
        "default_card_type": settings.DEFAULT_CARD_TYPE,
    }

# ---------- routers ----------
app.include_router(deck.router, tags=["deck"])
app.include_router(sessions.router, tags=["sessions"])
app.include_router(export.router, tags=["export"])
