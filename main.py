# 📦 main.py

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_client import start_http_server
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog
import uvicorn

from api.handlers import router as api_router
from config import settings
from schemas.schemas import ErrorResponse

log = structlog.get_logger()

# ─────────────────────────────
# API Setup
app = FastAPI(title=settings.app_name, version=settings.version)
app.include_router(api_router)

# ─────────────────────────────
# Error envelopes
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(status="error", message=str(exc.detail)).model_dump(),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Keep only the JSON-safe keys; ctx/input may hold arbitrary objects
    errors = [{k: err[k] for k in ("type", "loc", "msg") if k in err} for err in exc.errors()]
    log.info("Request validation failed", path=request.url.path, errors=len(errors))
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(status="error", message="Invalid request.", info=errors).model_dump(),
    )

# ─────────────────────────────
# Startup event
@app.on_event("startup")
async def startup_event():
    if settings.prometheus_port:
        start_http_server(settings.prometheus_port)
        log.info("Prometheus exporter started", port=settings.prometheus_port)
    log.info("MinistryCare recommender started", version=settings.version)

# ─────────────────────────────
# Main entrypoint
if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
    )
