from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from library_api.core.config import settings
from library_api.core.middleware_correlation import CorrelationIdMiddleware
from library_api.core.logging import setup_logging
from library_api.core.errors import register_exception_handlers
from library_api.db.session import init_db


# Routers
from fastapi import APIRouter
from library_api.api.routes.authors import router as authors_router
from library_api.api.routes.books import router as books_router


setup_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    # no migrations: tables are created on startup
    init_db()
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Library API - manage authors and their books.",
    version="1.0.0",
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

# CORS middleware - allow docs UI to make API requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:8000", "http://127.0.0.1:8000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(CorrelationIdMiddleware)

# Root endpoint
@app.get("/")
async def root():
    """API root endpoint with basic information."""
    return {
        "message": "Welcome to Library API",
        "version": "1.0.0",
        "docs_url": "/docs",
        "redoc_url": "/redoc",
        "api_v1_str": settings.API_V1_STR,
        "endpoints": {
            "authors": f"{settings.API_V1_STR}/authors",
            "books": f"{settings.API_V1_STR}/books",
        },
    }

register_exception_handlers(app)

# Mount routers
api = APIRouter(prefix=settings.API_V1_STR)
api.include_router(authors_router)
api.include_router(books_router)
app.include_router(api)
