from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import uvicorn

from app.core.config import settings, build_cors_origin_regex, split_exact_origins
from app.core.exceptions import error_envelope, format_validation_errors
from app.core.logging import setup_logging
from app.middleware.logging_middleware import LoggingMiddleware, StructlogMiddleware
from app.controllers import product_controller
from app.sao.product_sao import product_sao

logger = setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Application startup",
        environment=settings.environment,
        product_backend=product_sao.base_url or "unconfigured",
    )
    if not product_sao.base_url:
        logger.warning("PRODUCT_BACKEND_URL is not set; product handlers will answer 503")

    yield

    logger.info("Application shutdown")


app = FastAPI(
    title="Marketplace Product API",
    description="Authenticated and validated product routes for the marketplace",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.environment == "local" else None,
    redoc_url="/redoc" if settings.environment == "local" else None,
)

cors_origins = settings.get_cors_origins_list()
app.add_middleware(
    CORSMiddleware,
    allow_origins=split_exact_origins(cors_origins),
    allow_origin_regex=build_cors_origin_regex(cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Starlette runs the last added middleware first, so LoggingMiddleware sets the request id
app.add_middleware(StructlogMiddleware)
app.add_middleware(LoggingMiddleware)

app.include_router(product_controller.router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    return {
        "message": "Marketplace Product API is running",
        "version": "1.0.0",
        "environment": settings.environment,
        "docs_url": "/docs" if settings.environment == "local" else "Documentation disabled in production"
    }


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "environment": settings.environment,
        "product_backend_configured": bool(product_sao.base_url),
    }


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = format_validation_errors(exc.errors())
    logger.warning(
        "Request validation failed",
        path=request.url.path,
        method=request.method,
        fields=[error["field"] for error in errors],
    )
    return JSONResponse(
        status_code=400,
        content=error_envelope(400, "Validation failed", errors),
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    logger.warning(
        "HTTP Exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
        method=request.method
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(exc.status_code, exc.detail),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled Exception",
        error=str(exc),
        path=request.url.path,
        method=request.method
    )
    return JSONResponse(
        status_code=500,
        content=error_envelope(500, "Internal server error"),
    )


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.environment == "local",
        log_config=None
    )
