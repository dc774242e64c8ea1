import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from coursework.core.config import LOG_LEVEL
from coursework.core.errors import ValidationError
from coursework.core.logging_middleware import LoggingMiddleware
from coursework.db.init_db import init_db
from coursework.routers.assignments import router as assignments_router

logging.basicConfig(level=LOG_LEVEL)

app = FastAPI(title="Coursework")

# Middleware
app.add_middleware(LoggingMiddleware)


# Request bodies that fail pydantic validation use the same envelope as domain errors
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    error = ValidationError("Invalid request", reason="invalid_fields")
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "message": error.message,
            "error": {**error.as_dict(), "details": jsonable_encoder(exc.errors())},
        },
    )


# Health check
@app.get("/health")
def health():
    return {"status": "ok"}


# Startup event
@app.on_event("startup")
def on_startup():
    init_db()


# Include routers
app.include_router(assignments_router, prefix="/assignments", tags=["assignments"])
