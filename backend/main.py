from contextlib import asynccontextmanager
from datetime import datetime
import logging
import os
import time

from dotenv import load_dotenv

load_dotenv()
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from database import Database, get_database_url
import routers.ingredients as ingredients
import routers.inventory as inventory
import routers.menu as menu

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
_logging_configured = False

logger = logging.getLogger(__name__)
request_logger = logging.getLogger("requests")


def configure_logging():
    """
    Configure the root logger once per process.

    Logs go to the console and, unless LOG_DIR is set to an empty string, to a
    log file named after the start time.
    """
    global _logging_configured
    if _logging_configured:
        return
    level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)

    log_dir = os.getenv("LOG_DIR", "logs")
    if log_dir:
        os.makedirs(log_dir, exist_ok=True) # Create the log directory if it doesn't exist
        current_time_str = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        file_handler = logging.FileHandler(os.path.join(log_dir, f"app_{current_time_str}.log"), mode='a')
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(file_handler)

    # Also output logs to the console
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(console_handler)
    _logging_configured = True


def create_app(database: Database = None) -> FastAPI:
    """Build the API around `database`, or around one configured from the environment."""
    configure_logging()
    if database is None:
        database = Database(get_database_url())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Application starting up...")
        app.state.database.connect()
        yield
        logger.info("Shutting down...")
        app.state.database.close()

    app = FastAPI(lifespan=lifespan)
    app.state.database = database

    allowed_origins_str = os.getenv(
        "CORS_ALLOWED_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173"
    )

    # Split the string into a list, stripping any whitespace
    allowed_origins = [origin.strip() for origin in allowed_origins_str.split(',')]

    # Enable CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        code = response.status_code
        level = logging.ERROR if code >= 500 else logging.WARNING if code >= 400 else logging.INFO
        request_logger.log(level, "%s %s %d - %dms", request.method, request.url.path, code, duration_ms)
        return response

    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema
        app.openapi_schema = get_openapi(
            title="Cafe Inventory API",
            version="1.0.0",
            description="Menu and ingredient inventory management for the cafe",
            routes=app.routes,
        )
        return app.openapi_schema

    app.openapi = custom_openapi

    app.include_router(ingredients.router)
    app.include_router(inventory.router)
    app.include_router(menu.router)

    @app.get("/")
    async def root():
        return {"message": "Welcome to the Cafe Inventory API!"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", "3000")))
