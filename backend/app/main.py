import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.routes import extract, health, process
from app.config import get_settings, validate_settings
from app.services.summary_service import get_profile

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(title="Lecture Resume API")

app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=get_settings().cors_origin_regex,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(extract.router, prefix="/api", tags=["extract"])
app.include_router(process.router, prefix="/api", tags=["process"])


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render errors as {"error": ...}, the shape the browser client reads."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    if any(err.get("type") == "json_invalid" for err in exc.errors()):
        message = "Invalid JSON body"
    else:
        message = "Invalid request body"
    logger.warning("Rejected request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message},
    )


@app.on_event("startup")
async def check_configuration():
    """Refuse to start without the API keys every request depends on."""
    settings = get_settings()
    error = validate_settings(settings)
    if error is not None:
        logger.critical("%s", error)
        raise error
    get_profile(settings.summary_profile)


@app.on_event("startup")
async def ensure_uploads_dir():
    """Create the transient upload directory if it doesn't exist."""
    settings = get_settings()
    settings.uploads_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Staging uploads in %s", settings.uploads_dir)
