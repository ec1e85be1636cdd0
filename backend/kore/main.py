from fastapi import FastAPI, Request, HTTPException
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from kore.routers import auth, master_catalog, orders, purchase_orders, users, vendors
from kore.database import engine, Base
from kore.config import settings
from kore.errors import AppError, validation_message
from kore.services.storage_service import storage_service
import kore.models  # noqa: F401  (register tables on Base.metadata)
import logging
import sys

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

logger = logging.getLogger(__name__)

logger.info("=" * 60)
logger.info("Starting Kore Distribution API")
logger.info("=" * 60)
logger.info(f"S3 storage configured: {bool(settings.storage_access_key_id and settings.storage_secret_access_key)}")
logger.info(f"Auto-create tables: {settings.auto_create_tables}")
logger.info("=" * 60)

# In production, use migrations
if settings.auto_create_tables:
    Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Kore Distribution API",
    description="Catalogue, purchase orders, vendors and distributor orders for footwear distribution",
    version="1.0.0"
)

# Endpoints whose responses use the {success, message} envelope
ENVELOPE_PREFIXES = ("/api/auth", "/api/users")


def parse_cors_origins(origins_str: str) -> list:
    """Parse CORS origins string into a list"""
    return [origin.strip() for origin in origins_str.split(",") if origin.strip()]


app.add_middleware(
    CORSMiddleware,
    allow_origins=parse_cors_origins(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(master_catalog.router)
app.include_router(vendors.router)
app.include_router(purchase_orders.router)
app.include_router(orders.router)
app.include_router(orders.inventory_router)


@app.get("/")
def root():
    return {"message": "Kore Distribution API", "version": "1.0.0"}


@app.get("/health")
def health_check():
    return {"status": "healthy"}


@app.get("/uploads/{storage_key:path}")
def serve_upload(storage_key: str):
    """Serve a locally stored catalogue image"""
    try:
        content = storage_service.download_file(storage_key)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail="File not found")
    return Response(content=content, media_type=storage_service.get_content_type(storage_key))


def error_response(request: Request, status_code: int, message: str) -> JSONResponse:
    content = {"message": message}
    if request.url.path.startswith(ENVELOPE_PREFIXES):
        content = {"success": False, "message": message}
    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return error_response(request, exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return error_response(request, 400, validation_message(exc.errors()))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(request, exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Last-resort handler: log and return a generic 500"""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return error_response(request, 500, "Server error")
