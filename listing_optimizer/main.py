# listing_optimizer/main.py - LISTING OPTIMIZER API
# Handles: AI listing generation, URL analysis, SEO scoring, deterministic optimization
# All endpoints working with proper CORS

import logging
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import get_settings
from .errors import ListingOptimizerError
from .models import HealthResponse
from .routers import listing_router, seo_router, url_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Listing Optimizer",
    description="Marketplace listing generation, optimization and SEO scoring",
    version=__version__,
)

# CORS middleware - ALLOW ALL
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(listing_router)
app.include_router(url_router)
app.include_router(seo_router)


# ============================================================
# HEALTH CHECK
# ============================================================

@app.get("/healthz", response_model=HealthResponse)
async def healthz():
    """Health check endpoint"""
    return {
        "status": "ok",
        "version": __version__,
        "openai_configured": bool(get_settings().openai_api_key),
    }


# ============================================================
# ERROR HANDLERS
# ============================================================

def error_response(status_code: int, error, details=None) -> JSONResponse:
    content = {"success": False, "error": error}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(ListingOptimizerError)
async def listing_error_handler(request, exc: ListingOptimizerError):
    """Handle typed pipeline errors"""
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} ({exc.status_code}): {exc.message}")
    else:
        logger.warning(f"{type(exc).__name__} ({exc.status_code}): {exc.message}")
    return error_response(exc.status_code, exc.message, exc.details)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc: RequestValidationError):
    """Malformed request bodies are client errors"""
    logger.warning(f"Invalid request body: {exc.errors()}")
    return error_response(400, "Invalid request", jsonable_errors(exc))


@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc: HTTPException):
    """Handle HTTP exceptions"""
    if exc.status_code >= 500:
        logger.error(f"HTTP {exc.status_code}: {exc.detail}")
    else:
        logger.warning(f"HTTP {exc.status_code}: {exc.detail}")
    return error_response(exc.status_code, exc.detail)


@app.exception_handler(Exception)
async def general_exception_handler(request, exc: Exception):
    """Handle general exceptions"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return error_response(500, "Internal server error")


def jsonable_errors(exc: RequestValidationError):
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)
