import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from app.core.config import HOST, LOG_LEVEL, PORT
from app.core.errors import register_exception_handlers
from app.core.logging_middleware import LoggingMiddleware
from app.db.init_db import init_db
from app.routers.assignments import router as assignments_router
from app.routers.auth import router as auth_router
from app.routers.courses import router as courses_router
from app.routers.gradebook import router as gradebook_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(title="Gradebook", lifespan=lifespan)

# Middleware
app.add_middleware(LoggingMiddleware)

register_exception_handlers(app)


# Health check
@app.get("/health")
def health():
    return {"status": "ok"}


# Include routers
app.include_router(auth_router, prefix="/auth", tags=["auth"])
app.include_router(assignments_router, tags=["assignments"])
app.include_router(gradebook_router, tags=["gradebook"])
app.include_router(courses_router, tags=["courses"])


def run() -> None:
    uvicorn.run("app.main:app", host=HOST, port=PORT)
