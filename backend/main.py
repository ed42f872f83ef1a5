from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from api import rentals
from config.settings import settings
from constants import LoggingConfig
from init_db import init_database
from utils.logging_utils import set_logging_context, clear_logging_context
import logging
from logging.handlers import RotatingFileHandler
import sys
import uuid

APP_NAME = "Movie Rentals API"
APP_VERSION = "1.0.0"


def configure_logging():
    """
    Configure the root logger with a rotating file handler and a console handler.

    Safe to call more than once; handlers are only attached the first time.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level)
    if any(getattr(h, "_rentals_handler", False) for h in root_logger.handlers):
        return

    settings.log_dir.mkdir(parents=True, exist_ok=True)
    log_file = settings.log_dir / LoggingConfig.FILE_NAME
    log_formatter = logging.Formatter(LoggingConfig.FORMAT)

    # File handler with rotation (10MB per file, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=LoggingConfig.MAX_BYTES,
        backupCount=LoggingConfig.BACKUP_COUNT,
        encoding='utf-8'
    )
    file_handler.setFormatter(log_formatter)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)

    for handler in (file_handler, console_handler):
        handler._rentals_handler = True
        root_logger.addHandler(handler)

    logging.getLogger(__name__).info(f"Logging initialized: {log_file}")


configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_database()
    logger.info(f"🚀 {APP_NAME} {APP_VERSION} ready")
    yield
    logger.info("Application shutdown complete")


app = FastAPI(
    title=APP_NAME,
    description="Movie rental management: open, finish and list rentals",
    version=APP_VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_logging_context(request: Request, call_next):
    """Tag every log line emitted while handling a request with its ID and route"""
    set_logging_context(request_id=uuid.uuid4().hex[:12], path=f"{request.method} {request.url.path}")
    try:
        return await call_next(request)
    finally:
        clear_logging_context()


app.include_router(rentals.router, tags=["rentals"])


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {
        "status": "ok",
        "service": APP_NAME,
        "version": APP_VERSION
    }


if __name__ == "__main__":
    import uvicorn

    logger.info(f"🚀 Starting {APP_NAME} on http://{settings.host}:{settings.port}...")
    uvicorn.run(app, host=settings.host, port=settings.port)
