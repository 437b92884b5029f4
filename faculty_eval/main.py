"""
FastAPI main application
Faculty Evaluation Server - quiz scoring, demo evaluation and leaderboard

Modular architecture with separated API routers in faculty_eval/api/:
- health.py: Health check
- auth.py: Registration, login, current user
- users.py: User administration and attempt reset
- quiz.py: Question bank
- evaluations.py: Quiz submission, demo scores, leaderboard, admin views
- config.py: System configuration singleton
- realtime.py: Admin WebSocket channel

All routers access shared state via faculty_eval.state module.
"""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from faculty_eval import state
from faculty_eval.config import load_settings
from faculty_eval.core.errors import EvaluationServiceError
from faculty_eval.services.seeding import apply_seed, load_seed

# Import all API routers
from faculty_eval.api import auth, evaluations, health, quiz, realtime, users
from faculty_eval.api import config as config_router


# Setup logging
state.SETTINGS = load_settings()
logging.basicConfig(
    level=state.SETTINGS.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    # Startup: seed the store
    if state.SETTINGS.seed_file:
        try:
            counts = apply_seed(state.STORE, load_seed(state.SETTINGS.seed_file))
            logger.info(
                f"✅ Server started | Seeded {counts['questions']} questions, "
                f"created {counts['users']} users"
            )
        except Exception as e:
            logger.error(f"❌ Failed to load seed data: {e}")
            raise
    else:
        logger.info("✅ Server started without seed data")

    yield

    # Shutdown
    logger.info("🛑 Server shutting down")


# Create FastAPI app
app = FastAPI(
    title="Faculty Evaluation Server",
    description="Quiz scoring, demo evaluation and leaderboard for faculty evaluations",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=state.SETTINGS.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(EvaluationServiceError)
async def service_error_handler(request: Request, exc: EvaluationServiceError):
    if exc.status_code >= 500:
        logger.error(f"❌ {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# ==================== INCLUDE ROUTERS ====================

# Health check (GET /health)
app.include_router(health.router)

# Auth endpoints (POST /api/auth/register, /api/auth/login, GET /api/auth/me)
app.include_router(auth.router)

# User administration (GET/POST /api/users, PUT /api/users/{id}, PATCH reset-attempt)
app.include_router(users.router)

# Question bank (GET/POST /api/quiz, PUT/DELETE /api/quiz/{id})
app.include_router(quiz.router)

# Evaluations (POST /api/evaluations, PUT /api/evaluations/{employeeId}, leaderboard, views)
app.include_router(evaluations.router)

# System config (GET/PUT /api/config)
app.include_router(config_router.router)

# Admin WebSocket (/ws/admin)
app.include_router(realtime.router)


# ==================== RUN SERVER ====================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
