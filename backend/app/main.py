# Freelance invoicing backend entrypoint.

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.app.api import auth
from backend.app.api import clients
from backend.app.api import dashboard
from backend.app.api import invoices
from backend.app.api import payments
from backend.app.core.dev_seed import ensure_default_dev_owner
from backend.app.core.errors import InvoicingError
from backend.app.core.logging import configure_logging, get_logger
from backend.app.core.settings import get_settings
from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine
from backend.app.services.numbering import get_invoice_number_generator

configure_logging()
logger = get_logger(__name__)

Base.metadata.create_all(bind=engine)

app = FastAPI()
settings = get_settings()

origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router, prefix=settings.api_prefix)
app.include_router(clients.router, prefix=settings.api_prefix)
app.include_router(invoices.router, prefix=settings.api_prefix)
app.include_router(dashboard.router, prefix=settings.api_prefix)
app.include_router(payments.router, prefix=settings.api_prefix)


def _format_location(loc) -> str:
    parts = [str(part) for part in loc if part != "body"]
    return ".".join(parts) or "body"


@app.exception_handler(InvoicingError)
async def handle_invoicing_error(request: Request, exc: InvoicingError):
    if exc.status_code >= 500:
        logger.error("Request failed", path=request.url.path, error=exc.detail)
    content = {"detail": exc.detail}
    if exc.errors:
        content["errors"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    errors = [{"loc": list(error["loc"]), "msg": error["msg"]} for error in exc.errors()]
    message = "; ".join(f"{_format_location(error['loc'])}: {error['msg']}" for error in errors)
    return JSONResponse(status_code=400, content={"detail": f"Validation error: {message}", "errors": errors})


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception("Unhandled error", path=request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/")
def read_root():
    return {"app": "Freelance Invoicing backend", "status": "ok"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.on_event("startup")
def seed_on_startup():
    db = SessionLocal()
    try:
        get_invoice_number_generator().seed_from_db(db)
        ensure_default_dev_owner(db)
    finally:
        db.close()
