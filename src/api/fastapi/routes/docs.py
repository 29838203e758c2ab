from fastapi import APIRouter, Depends

from src.api.fastapi.dependencies import get_doc_service
from src.models.schemas.routing import DocSearchRequest, DocSearchResponse
from src.services.docs import DocService

router = APIRouter(
    prefix="/docs",
    tags=["Documentation"],
)


@router.post("/search", response_model=DocSearchResponse)
async def search_documentation(
    request: DocSearchRequest,
    doc_service: DocService = Depends(get_doc_service),
):
    """Up to three FeatBit documentation URLs for a question"""
    urls = await doc_service.get_documentation_urls(request.topic)
    return DocSearchResponse(urls=urls)
