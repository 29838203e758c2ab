from fastapi import FastAPI
import uvicorn
from dotenv import load_dotenv
from contextlib import asynccontextmanager

load_dotenv()

from src.api.fastapi import FastAPIApp
from src.core.config import settings
from src.core.container import build_services
from src.utils.exception import add_exception_handlers
from src.utils.logging.otel_logger import get_logger, logger

# Module loggers under src.* propagate here
get_logger("src")

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting up {settings.app_name} ({settings.env})")
    try:
        app.state.services = build_services(settings)
    except Exception as e:
        logger.error(f"Failed to build routing services: {e}")
        raise e

    yield

    logger.info(f"Shutting down {settings.app_name}")
    stats = app.state.services.cost_tracker.get_stats()
    logger.info(f"LLM usage this run: {stats}")

app_instance = FastAPIApp(lifespan=lifespan)
app = app_instance.get_app()

add_exception_handlers(app, logger)

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
