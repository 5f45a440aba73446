# hotelhub/main.py

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hotelhub.config import ALLOWED_ORIGINS
from hotelhub.errors import HotelHubError
from hotelhub.logging_config import setup_logging
from hotelhub.middleware import RequestIDMiddleware
from hotelhub.routes.agent import router as agent_router
from hotelhub.routes.guests import router as guests_router
from hotelhub.routes.health import router as health_router
from hotelhub.routes.metrics import router as metrics_router
from hotelhub.routes.payments import router as payments_router
from hotelhub.routes.reservations import router as reservations_router
from hotelhub.routes.rooms import router as rooms_router

# Initialize structured logging
setup_logging()
logger = structlog.get_logger(__name__)

app = FastAPI(
    title="HotelHub PMS API",
    description="Rooms, guests and reservations for HotelHub, plus the paid voice agent",
    version="1.0.0",
)

app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS if "*" not in ALLOWED_ORIGINS else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(HotelHubError)
async def hotelhub_error_handler(request: Request, exc: HotelHubError) -> JSONResponse:
    """Render expected failures as {"error": message} with their status code."""
    logger.info("request_failed", code=exc.code, status_code=exc.status_code, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", error=str(exc))
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# Register routers
app.include_router(health_router, tags=["Health"])
app.include_router(metrics_router, tags=["Metrics"])
app.include_router(rooms_router, tags=["Rooms"])
app.include_router(guests_router, tags=["Guests"])
app.include_router(reservations_router, tags=["Reservations"])
app.include_router(payments_router, prefix="/api", tags=["Payments"])
app.include_router(agent_router, prefix="/agent", tags=["Voice Agent"])


@app.on_event("startup")
def startup_event() -> None:
    """Log configuration gaps that disable optional features."""
    from hotelhub import config

    logger.info("FastAPI application starting up...")

    if not config.STRIPE_SECRET_KEY:
        logger.warning("stripe_not_configured", detail="payment endpoints will return 500")
    if not config.VOICE_AGENT_ID:
        logger.warning("voice_agent_not_configured", detail="/agent/hotel-data will return 500")

    logger.info("FastAPI application initialized")
