from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from src.models.schemas.responses import BaseResponse


class RouteQueryRequest(BaseModel):
    query: str = Field(..., min_length=1)
    namespace: str = Field(..., min_length=1, description="Registered namespace, e.g. 'deployments'")
    max_results: int = Field(1, ge=1, le=10)
    hints: Optional[Dict[str, str]] = None


class DocSearchRequest(BaseModel):
    topic: str = Field(..., min_length=1, description="Question or topic about FeatBit")


class DocSearchResponse(BaseResponse):
    success: bool = True
    urls: List[str] = Field(default_factory=list)


class SdkIntegrationRequest(BaseModel):
    sdk: str = Field(..., min_length=1, description="SDK identifier, e.g. 'dotnet-server-sdk'")
    topic: str = ""


class DeploymentHowToRequest(BaseModel):
    method: str = Field(..., description="helm-charts, terraform, docker-compose, aspire or others")
    where_to_deploy: str = Field(..., description="azure, aws, gcp, on-premises, kubernetes, docker-compose or all")
    topic: str = ""


class ContentResponse(BaseResponse):
    success: bool = True
    content: str


class ListResponse(BaseResponse):
    success: bool = True
    items: List[Dict[str, Any]] = Field(default_factory=list)
