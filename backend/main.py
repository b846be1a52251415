"""
Swing Kinetics Backend API

FastAPI application for baseball swing kinetics scoring.

Run with:
    uvicorn main:app --reload --host 0.0.0.0 --port 8000

API docs available at:
    http://localhost:8000/docs (Swagger UI)
    http://localhost:8000/redoc (ReDoc)
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kinetics.config import API_VERSION, CORS_ORIGINS, DEFAULT_LEVEL
from kinetics_api.routes import router as api_router

# =============================================================================
# Logging Configuration
# =============================================================================

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan (startup/shutdown)
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup code before app starts accepting requests,
    and cleanup code when app shuts down.
    """
    # Startup
    logger.info("Swing Kinetics API starting up...")
    logger.info("API docs: http://localhost:8000/docs")
    logger.info(f"Default benchmark group: {DEFAULT_LEVEL}")

    yield  # App runs here

    # Shutdown
    logger.info("Swing Kinetics API shutting down...")


# =============================================================================
# FastAPI App
# =============================================================================

app = FastAPI(
    title="Swing Kinetics API",
    description="""
    **Baseball Swing Kinetics Scoring**

    Turns motion and ball-tracking measurements into scores and diagnoses.

    ## Features

    - **Kinematic Sequence** diagnosis from pose frames
    - **Contact Quality Score** (StatCast-aligned)
    - **Population Percentiles** by age/level
    - **Kinetic Fingerprint** and motor profile
    - **Ball Flight Prediction** from biomechanics

    ## Endpoints

    - `GET /api/health` - Health check
    - `POST /api/sequence/analyze` - Sequence analysis from pose frames
    - `POST /api/contact/score` - Score one batted ball
    - `POST /api/contact/session` - Score a session
    - `POST /api/population/percentiles` - Percentile ranks
    - `POST /api/fingerprint` - Kinetic Fingerprint
    - `POST /api/ball-flight/predict` - Ball flight prediction
    """,
    version=API_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# =============================================================================
# CORS Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,       # React / Vite dev servers by default
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


# =============================================================================
# Routes
# =============================================================================

app.include_router(api_router, prefix="/api")


# =============================================================================
# Root endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - API information.
    """
    return {
        "name": "Swing Kinetics API",
        "version": API_VERSION,
        "description": "Baseball swing kinetics scoring",
        "docs": "/docs",
        "health": "/api/health",
        "endpoints": sorted(
            route.path for route in app.routes
            if route.path.startswith("/api/")
        ),
    }


# =============================================================================
# Run directly (for development)
# =============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
