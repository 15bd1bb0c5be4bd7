"""FastAPI backend for the legislative news service."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from legis_news.api import admin, health, news
from legis_news.config import LOG_LEVEL, PORT, get_cors_origins
from legis_news.db.pool import close_pool, init_pool
from legis_news.errors import AppError
from legis_news.redis_client import close_redis_pool, init_redis_pool

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Legislative News API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(news.router)
app.include_router(admin.router)
app.include_router(health.router)

# ============================================================================
# LIFECYCLE
# ============================================================================

@app.on_event("startup")
async def startup_event():
    await init_pool()
    await init_redis_pool()
    logger.info("Startup: registered routes:")
    for route in app.routes:
        logger.info(f" - {route.path} [{getattr(route, 'methods', '')}]")


@app.on_event("shutdown")
async def shutdown_event():
    await close_redis_pool()
    await close_pool()

# ============================================================================
# ERROR HANDLERS
# ============================================================================

def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"status": "error", "message": message})


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    logger.error(f"{exc.status_code} - {exc.message} ({request.method} {request.url.path})")
    return _error_response(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
        message = f"{location}: {first.get('msg')}" if location else first.get("msg", "Invalid request")
    else:
        message = "Invalid request"
    logger.warning(f"400 - {message} ({request.method} {request.url.path})")
    return _error_response(400, message)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Internal Server Error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return _error_response(500, "Internal server error")


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting server on port {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
