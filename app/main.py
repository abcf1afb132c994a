import logging

from app import config

# Log configuration (before other imports)
# ruff: noqa: E402
logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    force=True
)

from contextlib import asynccontextmanager  # noqa: E402

from fastapi import FastAPI, Request  # noqa: E402
from fastapi.exceptions import RequestValidationError  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from fastapi.responses import JSONResponse  # noqa: E402

from app.api.base import api_router  # noqa: E402
from app.db.session import create_tables  # noqa: E402

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if config.DB_CREATE_TABLES:
        await create_tables()
    yield


app = FastAPI(
    title="Task Tracker API",
    description="Backend API for personal task tracking",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def format_validation_errors(errors) -> str:
    """Flatten pydantic errors into 'field: message; ...'"""
    messages = []
    for error in errors:
        # Drop the leading "body"/"query"/"path" segment
        location = [str(part) for part in error.get("loc", ())[1:]]
        field = ".".join(location) or str(error.get("loc", ("request",))[0])
        messages.append(f"{field}: {error.get('msg')}")
    return "; ".join(messages)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    detail = format_validation_errors(exc.errors())
    logger.info(f"Rejected {request.method} {request.url.path}: {detail}")
    return JSONResponse(status_code=400, content={"detail": detail})


# Include all API routes
app.include_router(api_router)


@app.get("/")
def read_root():
    return {
        "message": "Task Tracker API",
        "docs": "/docs",
        "version": "1.0.0"
    }
