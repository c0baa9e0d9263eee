import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from venue_booking.api.booking import router as booking_router
from venue_booking.application.exceptions import (
    BookingError,
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from venue_booking.core.config import settings


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("booking_id", "status", "recipient", "reason", "error"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title=f"{settings.VENUE_NAME} booking", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.ALLOW_ORIGIN],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(booking_router, tags=["booking"])


ERROR_STATUS_CODES: dict[type[BookingError], int] = {
    ValidationError: 400,
    NotFoundError: 404,
    ConflictError: 409,
    InvalidTransitionError: 409,
}


@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
    status_code = next(
        (code for kind, code in ERROR_STATUS_CODES.items() if isinstance(exc, kind)), 500
    )
    if status_code >= 500:
        logging.getLogger(__name__).error(
            "Booking request failed", extra={"reason": exc.code, "error": str(exc)}
        )
    return JSONResponse(status_code=status_code, content={"error": exc.code, "message": str(exc)})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logging.getLogger(__name__).exception(
        "Unhandled error", extra={"reason": type(exc).__name__, "error": str(exc)}
    )
    return JSONResponse(
        status_code=500,
        content={"error": "InternalError", "message": "The request could not be completed. Please try again later."},
    )


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
