import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from capsule_closet.core.config import settings
from capsule_closet.core.db import engine
from capsule_closet.routers import health, closet, capsules, outfits, profile
from capsule_closet.routers import taxonomy as taxonomy_router

logger = logging.getLogger("capsule_closet.requests")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("startup: app=%s env=%s prefix=%s", settings.APP_NAME, settings.APP_ENV, settings.API_PREFIX)
    yield
    await engine.dispose()
    logger.info("shutdown: database pool closed")


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# closet -> capsule -> outfits, plus onboarding and reference data
for module in (health, profile, closet, capsules, outfits, taxonomy_router):
    app.include_router(module.router, prefix=settings.API_PREFIX)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info("%s %s status=%s %.1fms", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


@app.get("/")
async def root():
    return {"name": settings.APP_NAME, "env": settings.APP_ENV, "api": settings.API_PREFIX}
