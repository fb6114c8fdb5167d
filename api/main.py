"""FastAPI application entry point."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from api.balance import InMemoryBalanceStore
from api.routes import blackjack
from api.websocket import router as ws_router
from config import config
from core.game import GameManager
from core.strategy import RuleSet

logging.basicConfig(level=config.logging.level, format=config.logging.format)

# Initialize rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    enabled=config.rate_limit.enabled,
    default_limits=[f"{config.rate_limit.requests_per_minute}/minute"],
)


def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle rate limit exceeded errors."""
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}"},
    )


def build_rules() -> RuleSet:
    """Build the table rules from configuration."""
    return RuleSet(
        min_bet=config.game.min_bet,
        max_bet=config.game.max_bet,
        dealer_hits_soft_17=config.game.dealer_hits_soft_17,
        blackjack_payout=config.game.blackjack_payout,
    )


app = FastAPI(
    title="Coin Blackjack",
    description="Single-player blackjack for coins against the dealer",
    version="0.1.0",
)

# Game manager and balances live for the lifetime of the app
app.state.manager = GameManager(rules=build_rules())
app.state.balances = InMemoryBalanceStore()

# Add rate limiter to app state and exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS middleware with configurable origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors.allowed_origins,
    allow_credentials=config.cors.allow_credentials,
    allow_methods=config.cors.allow_methods,
    allow_headers=config.cors.allow_headers,
)


@app.get("/api/health")
@limiter.limit(f"{config.rate_limit.requests_per_minute}/minute")
async def health_check(request: Request) -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


# Include routers
app.include_router(blackjack.router, prefix="/api/blackjack", tags=["blackjack"])
app.include_router(ws_router, prefix="/ws", tags=["websocket"])
