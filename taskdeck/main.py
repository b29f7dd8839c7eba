import logging
from contextlib import asynccontextmanager

from taskdeck.config import CORS_ORIGINS, LOG_LEVEL

# Log configuration (before other imports)
# ruff: noqa: E402
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    force=True
)

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from taskdeck.api.base import api_router  # noqa: E402
from taskdeck.db import get_store  # noqa: E402

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the document once at startup so a missing file is created and a corrupt one is reported early"""
    store = app.dependency_overrides.get(get_store, get_store)()
    document = store.load()
    logger.info(
        f"Loaded {store.path}: {len(document.tasks)} task(s), "
        f"{len(document.projects)} project(s), {len(document.stats)} stats record(s)"
    )
    yield


app = FastAPI(
    title="Taskdeck API",
    description="Personal task management: tasks, projects, time-horizon views and completion stats",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=CORS_ORIGINS != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include all API routes
app.include_router(api_router)


@app.get("/")
def read_root():
    return {
        "message": "Taskdeck API",
        "docs": "/docs",
        "version": "1.0.0"
    }
