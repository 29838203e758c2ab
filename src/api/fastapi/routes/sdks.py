from fastapi import APIRouter, Depends

from src.api.fastapi.dependencies import get_sdk_service
from src.models.schemas.routing import ContentResponse, ListResponse, SdkIntegrationRequest
from src.services.sdks import SdkService

router = APIRouter(
    prefix="/sdks",
    tags=["SDKs"],
)


@router.get("", response_model=ListResponse)
def get_supported_sdks(sdk_service: SdkService = Depends(get_sdk_service)):
    """List supported SDK identifiers"""
    return ListResponse(items=sdk_service.get_supported_sdks())


@router.post("/integration", response_model=ContentResponse)
async def get_sdk_integration(
    request: SdkIntegrationRequest,
    sdk_service: SdkService = Depends(get_sdk_service),
):
    """Integration guide for one SDK, narrowed by topic where several guides exist"""
    content = await sdk_service.get_sdk_documentation(request.sdk, request.topic)
    return ContentResponse(content=content)
