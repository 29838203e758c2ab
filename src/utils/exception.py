from logging import Logger
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
import traceback

from src.models.schemas.responses import ErrorResponse
from src.services.doc_routing import CatalogNamespaceError

class ExceptionHandler:
    def __init__(self, logger: Logger):
        self.logger = logger

    def handle_exception(self, e: Exception, request_id: str) -> JSONResponse:
            if isinstance(e, CatalogNamespaceError):
                self.logger.error(f"Unknown namespace: {e}", extra={"request_id": request_id, "error": e.to_dict()})
                return JSONResponse(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    content=ErrorResponse(
                        success=False, errorMessage=f"{e.message}. Known namespaces: {', '.join(e.details['known_namespaces'])}"
                    ).model_dump(),
                )
            elif isinstance(e, ValueError):
                self.logger.error(f"Value error: {str(e)}", extra={"request_id": request_id})
                return JSONResponse(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    content=ErrorResponse(
                        success=False, errorMessage=f"validation error: {e}"
                    ).model_dump(),
                )
            else:
                tb_str = traceback.format_exc()
                self.logger.error(
                    f"Internal error - Type: {type(e).__name__}, Message: {str(e)}\nTraceback:\n{tb_str}", 
                    extra={"request_id": request_id}
                )
                return JSONResponse(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    content=ErrorResponse(
                        success=False, errorMessage="an internal error just occurred"
                    ).model_dump(),
                )


def add_exception_handlers(app: FastAPI, logger: Logger) -> None:
    handler = ExceptionHandler(logger)

    async def handle(request: Request, exc: Exception) -> JSONResponse:
        return handler.handle_exception(exc, getattr(request.state, "id", "unknown"))

    app.add_exception_handler(CatalogNamespaceError, handle)
    app.add_exception_handler(ValueError, handle)
    app.add_exception_handler(Exception, handle)
