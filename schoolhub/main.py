# schoolhub/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from schoolhub.core.config import settings
from schoolhub.api.v1.endpoints import health, auth, surveys, reports

API_V1_PREFIX = "/api/v1"

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("schoolhub")

app = FastAPI(
    title=settings.APP_NAME,
    description="Survey analytics for the SchoolHub teacher dashboards",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Versioned routers
app.include_router(health.router,  prefix=API_V1_PREFIX)
app.include_router(auth.router,    prefix=API_V1_PREFIX)
app.include_router(surveys.router, prefix=API_V1_PREFIX)
app.include_router(reports.router, prefix=API_V1_PREFIX)

logger.info("%s started (env=%s)", settings.APP_NAME, settings.ENV)

@app.get("/health")
def health_root():
    return {"status": "ok", "message": "API is up"}

@app.get("/")
def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": "1.0.0",
        "docs": "/docs",
        "api_v1": API_V1_PREFIX,
    }
