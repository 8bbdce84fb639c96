from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
import sys
import uuid

from api import movies
from config.app_config import get_config
from constants import MEMORY_DATABASE_URL, RESOURCE_PREFIX
from database import init_engine
from init_db import init_database
from utils.error_handlers import register_exception_handlers
from utils.logging_utils import clear_logging_context, configure_logging, set_logging_context

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - startup and shutdown"""
    config = get_config()
    configure_logging(config.log_level, config.log_file)

    if config.database_url == MEMORY_DATABASE_URL:
        logger.info("Using in-memory movie store")
    else:
        engine = init_engine(config.database_url)
        init_database(engine)

    logger.info("Application startup complete")
    yield
    logger.info("Application shutdown complete")


app = FastAPI(
    title="Movie Catalog API",
    description="Paginated CRUD service for a movie catalogue",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Location", "X-Request-ID"],
)

register_exception_handlers(app)


@app.middleware("http")
async def request_logging_context(request: Request, call_next):
    """Tag every log line emitted while handling a request with its id, method and path."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    set_logging_context(request_id=request_id, method=request.method, path=request.url.path)
    try:
        response = await call_next(request)
    finally:
        clear_logging_context()
    response.headers["X-Request-ID"] = request_id
    return response


app.include_router(movies.router, prefix=RESOURCE_PREFIX, tags=["movies"])


@app.get("/health")
def health():
    """Health check endpoint"""
    return {"status": "ok"}


@app.get("/")
def root():
    """Root endpoint - API only mode"""
    return {
        "message": "Movie Catalog API",
        "docs": "/docs",
        "health": "/health",
        "resource": RESOURCE_PREFIX,
    }


if __name__ == "__main__":
    import uvicorn
    import socket

    config = get_config()

    # Check if port is available
    def is_port_in_use(port: int) -> bool:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            try:
                s.bind((config.host, port))
                return False
            except OSError:
                return True

    if is_port_in_use(config.port):
        logger.error(f"❌ Port {config.port} is already in use!")
        sys.exit(1)

    logger.info(f"🚀 Starting Movie Catalog API on http://{config.host}:{config.port}...")
    uvicorn.run(app, host=config.host, port=config.port)
