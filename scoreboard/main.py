"""
FastAPI main application
Quiz League Scoreboard - daily scores, season points and admin maintenance

Modular architecture with separated API routers in scoreboard/api/:
- health.py: Health check and system status
- auth.py: Sign-in sessions and the one-time admin grant
- submission.py: Daily score submission
- admin.py: Finish day, point/finish edits, alias merges, deletions
- leaderboard.py: Today's board, standings, shame, highs, playoffs
- config.py: Public configuration

All routers access shared state via scoreboard.state module.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from scoreboard import state
from scoreboard.config import load_settings
from scoreboard.core.store import DocumentStore
from scoreboard.errors import ScoreboardError
from scoreboard.services.identity import build_verifier

# Import all API routers
from scoreboard.api import health, auth, submission, admin, leaderboard
from scoreboard.api import config as config_router


# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    # Startup: load settings and open the document store
    try:
        state.SETTINGS = load_settings()
        state.STORE = DocumentStore(state.SETTINGS.data_file)
        state.VERIFY_IDENTITY = build_verifier(state.SETTINGS)
        logger.info(f"✅ Server started: {state.STORE.counts()}")
    except Exception as e:
        logger.error(f"❌ Failed to start: {e}")
        raise

    yield

    # Shutdown
    logger.info("🛑 Server shutting down")


# Create FastAPI app
app = FastAPI(
    title="Quiz League Scoreboard",
    description="Daily quiz scores, season points with tie-sharing ranks, and admin tools",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware (allow all origins for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ScoreboardError)
async def scoreboard_error_handler(request: Request, exc: ScoreboardError):
    """Map typed scoring-engine errors to HTTP responses"""
    logger.warning(f"⚠️ {request.method} {request.url.path} -> {exc.kind}: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# ==================== INCLUDE ROUTERS ====================

# Health check (GET /)
app.include_router(health.router)

# Sign-in and admin grant (POST /auth/sign-in, /auth/grant-admin)
app.include_router(auth.router)

# Submission endpoint (POST /submit)
app.include_router(submission.router)

# Admin endpoints (POST /admin/finish-day, /admin/points, etc.)
app.include_router(admin.router)

# Read endpoints (GET /api/today, /api/standings, /api/playoffs, etc.)
app.include_router(leaderboard.router)

# Config endpoint (GET /config)
app.include_router(config_router.router)


# ==================== RUN SERVER ====================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
