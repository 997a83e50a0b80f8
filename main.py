import os
import importlib
import logging
from fastapi import FastAPI, APIRouter, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from alembic.config import Config
from alembic import command
from sqlalchemy.exc import SQLAlchemyError

from core.config import get_settings
from core.errors import TRANSIENT, ValidationFailure, classify_store_error

settings = get_settings()
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# The directory where all application folders are located
APPS_DIRECTORY = "apps"
API_PREFIX = "/api/v1"
BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# --- Database Migration Function ---
def run_migrations():
    """Programmatically runs Alembic migrations."""
    logger.info("Running database migrations...")
    alembic_cfg = Config(os.path.join(BASE_DIR, "alembic.ini"))
    alembic_cfg.set_main_option("script_location", os.path.join(BASE_DIR, "alembic"))
    alembic_cfg.attributes["configure_logger"] = False
    command.upgrade(alembic_cfg, "head")
    logger.info("Migrations complete.")

# Initialize the main FastAPI application
app = FastAPI(
    title="Biomedical Equipment Fleet API",
    description="Coverage, liabilities, payment reminders and reports for a hospital equipment fleet.",
    version="1.0.0",
)

# --- CORS Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=['*'],  # Allows all origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Error Handlers ---
@app.exception_handler(ValidationFailure)
async def validation_failure_handler(request: Request, exc: ValidationFailure):
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": exc.message, "field": exc.field, "kind": exc.kind}
    )

@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    kind = classify_store_error(exc)
    logger.error(f"Store failure ({kind}) on {request.method} {request.url.path}: {exc}")
    if kind == TRANSIENT:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "The database is temporarily unavailable, try again", "kind": kind},
            headers={"Retry-After": "5"}
        )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": f"Database error: {exc.__class__.__name__}", "kind": kind}
    )

@app.get("/")
def root():
    return {"name": app.title, "version": app.version, "docs": "/docs"}

# --- Dynamic App Discovery and Router Inclusion ---
apps_path = os.path.join(BASE_DIR, APPS_DIRECTORY)

logger.debug(f"Searching for apps in: {apps_path}")

if not os.path.isdir(apps_path):
    logger.error(f"The directory '{APPS_DIRECTORY}' was not found.")
else:
    for item_name in sorted(os.listdir(apps_path)):
        app_dir = os.path.join(apps_path, item_name)

        if os.path.isdir(app_dir) and not item_name.startswith(('_', '.')):
            module_name = f"{APPS_DIRECTORY}.{item_name}.router"
            try:
                # Import the models from each app to ensure Alembic can detect them
                if os.path.isfile(os.path.join(app_dir, "models.py")):
                    importlib.import_module(f'{APPS_DIRECTORY}.{item_name}.models')

                router_module = importlib.import_module(module_name)
                router_instance = getattr(router_module, "router", None)

                if router_instance and isinstance(router_instance, APIRouter):
                    app.include_router(
                        router_instance,
                        prefix=f"{API_PREFIX}/{item_name}",
                        tags=[item_name.replace('_', ' ').capitalize()]
                    )
                    logger.debug(f"Loaded router from '{item_name}'.")
                else:
                    logger.warning(f"Could not find a valid APIRouter named 'router' in '{module_name}'.")

            except ImportError as e:
                logger.error(f"Failed to import router for '{item_name}': {e}")
                raise

# --- Startup Event Handler ---
@app.on_event("startup")
def startup_event():
    """Run database migrations on application startup."""
    logger.info("Starting Biomedical Equipment Fleet API...")
    run_migrations()
    logger.info("Application is ready to serve requests.")
