from fastapi import APIRouter, Depends

from src.api.fastapi.dependencies import get_router
from src.models.schemas.doc_routing import ResolvedContent
from src.models.schemas.routing import RouteQueryRequest
from src.services.doc_routing import DocumentRouter

router = APIRouter(
    prefix="/route",
    tags=["Routing"],
)


@router.post("", response_model=ResolvedContent)
async def route_query(
    request: RouteQueryRequest,
    document_router: DocumentRouter = Depends(get_router),
):
    """Route a query to the documents of one registered namespace"""
    return await document_router.route_query(
        request.query,
        request.namespace,
        max_results=request.max_results,
        hints=request.hints,
    )
