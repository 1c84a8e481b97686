import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from app.repos.posts_repo import FilePostsRepo
from app.routers import markdown, posts
from app.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    FilePostsRepo(settings.DATA_DIR).ensure_root()
    logger.info(f"Serving posts from {settings.DATA_DIR}")
    yield


app = FastAPI(
    title="Knowledge Base API",
    description="Personal notes stored as files",
    lifespan=lifespan,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    length = request.headers.get("content-length", "0")
    logger.info(f"{request.method} {request.url.path} (body: {length} bytes)")
    return await call_next(request)


app.include_router(posts.router)
app.include_router(markdown.router)


@app.get("/")
async def root():
    return {"message": "Knowledge Base API is running"}
