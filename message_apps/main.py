import logging
from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from message_apps.config import settings
from message_apps.database import create_tables
from message_apps.exceptions import StoreError

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_tables()
    logger.info(f"{settings.APP_NAME} {settings.VERSION} started")
    yield

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    description="Message Apps API",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

from message_apps.api import auth, friend_requests, messaging, users, pages
from message_apps.api.deps import get_current_username

protected = [Depends(get_current_username)]

app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(friend_requests.router, prefix="/api/friend-requests", tags=["friend-requests"], dependencies=protected)
app.include_router(messaging.router, prefix="/api", tags=["messaging"], dependencies=protected)
app.include_router(users.router, prefix="/api/users", tags=["users"], dependencies=protected)
app.include_router(pages.router, tags=["pages"], include_in_schema=False)


@app.exception_handler(StoreError)
async def handle_store_error(request: Request, exc: StoreError):
    logger.error(f"Store error on {request.method} {request.url.path}: {exc.__cause__!r}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    logger.info("Starting message_apps on port 8000")
    uvicorn.run("message_apps.main:app", host="0.0.0.0", port=8000)
