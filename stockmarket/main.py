# stockmarket/main.py

from contextlib import asynccontextmanager
from datetime import datetime
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from stockmarket.config import settings
from stockmarket.database import SessionLocal, init_db
from stockmarket.dependencies import get_event_service, get_simulator
from stockmarket.exceptions import NotFoundError, ValidationFailure
from stockmarket.routes import stocks, transactions, simulator, summaries
from stockmarket.scheduler import SimulationScheduler
from stockmarket.schemas import ErrorResponse
from stockmarket.seed import seed_stocks
from logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    if settings.SEED_DATA:
        with SessionLocal() as db:
            seed_stocks(db)

    scheduler = SimulationScheduler(get_simulator(), settings.SIMULATOR_INTERVAL_SECONDS)
    scheduler.start()
    try:
        yield
    finally:
        await scheduler.stop()
        get_event_service().close()


# Initialize FastAPI app
app = FastAPI(
    title="Stock Market API",
    description="API for managing stocks and transactions, with simulated price movements.",
    version="1.0.0",
    lifespan=lifespan
)

# Include API routers
app.include_router(stocks.router)
app.include_router(transactions.router)
app.include_router(simulator.router)
app.include_router(summaries.router)


def error_response(status_code: int, error: str, message: str, validation_errors=None) -> JSONResponse:
    body = ErrorResponse(
        timestamp=datetime.now(),
        status=status_code,
        error=error,
        message=message,
        validation_errors=validation_errors
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json", exclude_none=True))


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    logger.error(f"Entity not found: {exc}")
    return error_response(status.HTTP_404_NOT_FOUND, "Not Found", str(exc))


@app.exception_handler(ValidationFailure)
async def validation_failure_handler(request: Request, exc: ValidationFailure):
    logger.error(f"Illegal argument: {exc}")
    return error_response(status.HTTP_400_BAD_REQUEST, "Bad Request", str(exc))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.error(f"Validation error: {exc.errors()}")
    errors = {
        ".".join(str(part) for part in error["loc"]): error["msg"]
        for error in exc.errors()
    }
    return error_response(
        status.HTTP_400_BAD_REQUEST, "Validation Error", "Validation failed for request", errors
    )


@app.middleware("http")
async def log_exceptions_middleware(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as e:
        logger.error(f"Unhandled exception: {e}", exc_info=True)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error", "An unexpected error occurred"
        )


# Root endpoint
@app.get("/", response_model=dict)
async def root():
    return {
        "application": settings.APP_NAME,
        "status": "UP",
        "message": "Welcome to the Stock Market API",
        "docs": "/docs"
    }


# Health check endpoint
@app.get("/health", response_model=dict)
def health_check():
    return {"status": "healthy"}
