"""FastAPI application"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import API_HOST, API_PORT, CORS_ORIGINS, LOG_LEVEL, STORAGE_BACKEND
from .database import init_db
from .routes.users import router as users_router

logging.basicConfig(
    level=LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup when running on the relational backend"""
    logger.info(f"Starting with STORAGE_BACKEND={STORAGE_BACKEND}")
    if STORAGE_BACKEND == "sql":
        init_db()
    yield


app = FastAPI(
    title="Nearby Discovery API",
    description="Find people near you and rank them by distance",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS (everything allowed by default; restrict via CORS_ORIGINS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("discovery.main:app", host=API_HOST, port=API_PORT)
