"""FastAPI app for the realty listing/booking API. Run from repo root: uvicorn backend.main:app --reload."""
import sys

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException

from realty.config import CORS_ORIGINS, LOG_LEVEL
from realty.errors import RealtyError

from backend.routers import accounts, bookings, health, listings, profile, realtor

logger.remove()
logger.add(sys.stderr, level=LOG_LEVEL)

app = FastAPI(title="Realty API", version="1.0.0")


# Registered before CORS so CORS wraps it. Errors answered here never reach
# the server-error middleware, which re-raises to uvicorn.
@app.middleware("http")
async def unexpected_error(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse({"error": "Internal server error"}, status_code=500)


app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ----- Errors: every failure is {"error": message} -----
@app.exception_handler(HTTPException)
async def http_error(request: Request, exc: HTTPException):
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    return JSONResponse({"error": "Invalid request body"}, status_code=400)


@app.exception_handler(RealtyError)
async def realty_error(request: Request, exc: RealtyError):
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


app.include_router(health.router)
app.include_router(listings.router)
app.include_router(accounts.router)
app.include_router(bookings.router)
app.include_router(profile.router)
app.include_router(realtor.router)
