from fastapi import FastAPI, Request, Depends
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware
import os
import logging

from database import client, db, get_db, check_db_connection
from wallet.config import ERROR_MESSAGES
from wallet.db_init import ensure_indexes
from wallet.errors import WalletError
from wallet.routes import wallet_router

# Create the main app
app = FastAPI(title="Dinero Wallet - Virtual Currency API")

app.include_router(wallet_router)

app.add_middleware(
    CORSMiddleware,
    allow_credentials=True,
    allow_origins=[origin.strip() for origin in os.environ.get(
        'CORS_ORIGINS', 'http://localhost:3000').split(',')],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# ==================== ERROR HANDLERS ====================

@app.exception_handler(WalletError)
async def wallet_error_handler(request: Request, exc: WalletError):
    """Map wallet errors to their status code and {error, message} body."""
    if exc.http_status >= 500:
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc}")
    else:
        logger.info(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


@app.exception_handler(Exception)
async def generic_error_handler(request: Request, exc: Exception):
    """Catch-all: never leak internal details."""
    logger.exception(f"Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error", "message": ERROR_MESSAGES["INTERNAL"]}
    )


# ==================== HEALTH ====================

@app.get("/health")
async def health(database=Depends(get_db)):
    """Liveness plus database reachability"""
    try:
        await database.command('ping')
        return {"status": "ok", "database": "connected"}
    except Exception as e:
        logger.warning(f"Health check database ping failed: {e}")
        return {"status": "degraded", "database": "unavailable"}


@app.on_event("startup")
async def startup():
    # Check database connection first - fail fast if database is unavailable
    db_ok, db_error = await check_db_connection()
    if not db_ok:
        logger.critical(f"Database connection failed on startup: {db_error}")
        raise RuntimeError(
            f"Cannot start application - database connection failed: {db_error}")

    await ensure_indexes(db)


@app.on_event("shutdown")
async def shutdown_db_client():
    client.close()
