from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

# Import routers
from app.api.api import api_router
# Import settings for CORS and logging
from app.core.config import settings

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting up 8-K digest API...")
    if settings.SEC_USER_AGENT == "contact@example.com":
        logger.warning("SEC_USER_AGENT not set - using placeholder contact for SEC requests")

    yield

    # Shutdown
    logger.info("Shutting down 8-K digest API...")

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Recent SEC 8-K filings with extracted Items and Chinese summaries",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.API_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
    max_age=3600,
)

logger.info(f"CORS configured for environment: {settings.ENVIRONMENT}")

# Any unhandled error still answers in the digest's error shape
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={"ok": False, "error": str(exc) or "Internal server error"}
    )

# Root endpoint
@app.get("/")
async def root():
    return {
        "message": f"Welcome to {settings.PROJECT_NAME}",
        "version": "1.0.0",
        "status": "operational",
        "environment": settings.ENVIRONMENT
    }

# Health check endpoint
@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": "sec-8k-digest"
    }

# Include API router
app.include_router(api_router, prefix=settings.API_V1_STR)
