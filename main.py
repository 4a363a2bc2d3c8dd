from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import settings
from database import init_db, session_scope
from api.admin import router as admin_router
from api.auth import router as auth_router
from api.claims import router as claims_router
from api.policies import router as policies_router
from api.products import router as products_router
from api.transactions import router as transactions_router
from services.accounts import ensure_bootstrap_admin
from utils.exceptions import ClaimsAPIError
from utils.logging import get_logger

LOGGER = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    async with session_scope() as session:
        await ensure_bootstrap_admin(session)
    LOGGER.info("%s started", settings.app_name)
    yield


app = FastAPI(
    title=settings.app_name,
    description="Policyholder, policy and claim approval API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ClaimsAPIError)
async def handle_app_error(request: Request, exc: ClaimsAPIError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    fields = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        fields.append(".".join(loc) or err.get("msg", "body"))
    return JSONResponse(
        status_code=400,
        content={"error": f"Missing or invalid fields: {', '.join(dict.fromkeys(fields))}"},
    )


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if exc.status_code == 404 and message == "Not Found":
        message = "Endpoint not found"
    return JSONResponse(status_code=exc.status_code, content={"error": message}, headers=exc.headers)


@app.exception_handler(IntegrityError)
async def handle_integrity_error(request: Request, exc: IntegrityError):
    LOGGER.warning("Constraint violation on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(status_code=409, content={"error": "Conflicting record"})


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    LOGGER.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


app.include_router(auth_router, prefix=settings.api_prefix)
app.include_router(products_router, prefix=settings.api_prefix)
app.include_router(policies_router, prefix=settings.api_prefix)
app.include_router(claims_router, prefix=settings.api_prefix)
app.include_router(transactions_router, prefix=settings.api_prefix)
app.include_router(admin_router, prefix=settings.api_prefix)


@app.get("/health")
async def health():
    return {"status": "ok"}
