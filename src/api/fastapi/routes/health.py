from fastapi import APIRouter, Depends

from src.api.fastapi.dependencies import get_services
from src.core.container import Services
from src.utils.logging.otel_logger import logger

router = APIRouter(tags=["Health"])

@router.get("/health")
def health_check():
    logger.info("Health check endpoint hit")
    return {"status": "ok"}

@router.get("/ping")
def ping():
    logger.info("Ping endpoint hit")
    return {"status": "pong"}

@router.get("/ready")
def readiness(services: Services = Depends(get_services)):
    """Registered namespaces and LLM usage so far"""
    logger.info("Readiness endpoint hit")
    return {
        "status": "ready",
        "namespaces": services.registry.namespaces,
        "llm": services.cost_tracker.get_stats(),
    }
