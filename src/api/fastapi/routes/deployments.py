from fastapi import APIRouter, Depends

from src.api.fastapi.dependencies import get_deployment_service
from src.models.schemas.routing import ContentResponse, DeploymentHowToRequest, ListResponse
from src.services.deployments import DeploymentService

router = APIRouter(
    prefix="/deployments",
    tags=["Deployments"],
)


@router.get("/methods", response_model=ListResponse)
def get_deployment_methods(deployment_service: DeploymentService = Depends(get_deployment_service)):
    """List deployment guides with their method and platforms"""
    return ListResponse(items=deployment_service.get_available_deployment_methods())


@router.post("/how-to", response_model=ContentResponse)
async def how_to_deploy(
    request: DeploymentHowToRequest,
    deployment_service: DeploymentService = Depends(get_deployment_service),
):
    """Deployment guide for a method, target platform and topic"""
    content = await deployment_service.get_deployment_documentation(
        request.method, request.where_to_deploy, request.topic
    )
    return ContentResponse(content=content)
