import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from src.utils.logging import Logger

SKIPPED_PATHS = {"/", "/api/health", "/api/ping", "/metrics"}


class LogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.id = request_id

        if request.url.path in SKIPPED_PATHS:
            return await call_next(request)

        LOGGER = Logger("FastAPIApp").bind(
            request_id=request_id,
            client=request.headers.get("x-client", "unknown"),
        )

        extra = {
            "method": request.method,
            "url": str(request.url),
            "ip": request.client.host if request.client else "unknown",
        }
        LOGGER.info(f"Incoming Request {request.method} {request.url.path}", extra)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            extra["error"] = str(e)
            LOGGER.error("Error in request processing", extra=extra)
            raise

        extra["status_code"] = response.status_code
        extra["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
        LOGGER.info(f"Response {response.status_code} for {request.url.path}", extra=extra)

        response.headers["x-request-id"] = request_id
        return response
