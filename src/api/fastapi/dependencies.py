from fastapi import Request

from src.core.container import Services
from src.services.deployments import DeploymentService
from src.services.doc_routing import DocumentRouter
from src.services.docs import DocService
from src.services.sdks import SdkService


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_router(request: Request) -> DocumentRouter:
    return get_services(request).router


def get_doc_service(request: Request) -> DocService:
    return get_services(request).docs


def get_sdk_service(request: Request) -> SdkService:
    return get_services(request).sdks


def get_deployment_service(request: Request) -> DeploymentService:
    return get_services(request).deployments
