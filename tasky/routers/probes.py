"""
Welcome page, health and Kubernetes-style probes.
"""
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse
from pymongo.errors import PyMongoError

from ..core.config import Settings, get_settings
from ..core.database import Store, get_store

logger = logging.getLogger(__name__)

root_router = APIRouter()
router = APIRouter()


@root_router.get("/", response_class=PlainTextResponse)
def welcome():
    return "Welcome to Tasky API"


@router.get("/health")
def health_check(settings: Settings = Depends(get_settings)):
    """Application health and version"""
    logger.info("Healthcheck endpoint hit")
    return {"status": "UP", "version": settings.service_version}


@router.get("/readyz")
def readiness_probe(
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings)
):
    """Ready when the document store answers a ping within the readiness deadline"""
    try:
        store.ping(settings.readiness_timeout)
    except PyMongoError as e:
        logger.error(f"MongoDB not connected: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "DOWN", "error": "MongoDB not connected"}
        )

    logger.info("MongoDB connected")
    return {"status": "READY"}


@router.get("/healthz")
def liveness_probe():
    """Alive as long as the process answers"""
    logger.info("Liveness probe hit")
    return {"status": "ALIVE"}
