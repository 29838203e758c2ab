"""
Deployment documentation routing.

Picks the one deployment guide that best matches a deployment method, a
target platform and a free-text topic.
"""

from typing import Any, Dict, List

from src.models.schemas.doc_routing import CatalogEntry
from src.services.doc_routing import CatalogBuilder, CatalogRegistry, DocumentRouter, SelectionPromptBuilder
from src.utils.logging.otel_logger import logger

DEPLOYMENTS_NAMESPACE = "deployments"
DEPLOYMENTS_RESOURCE_PATH = "Deployments"
DEFAULT_DEPLOYMENT_DOC = "README.md"

DEPLOYMENT_DOCUMENTS: List[CatalogEntry] = [
    CatalogEntry(
        id="AspireAzureDeployment.md",
        description="Deploy FeatBit to Azure using .NET Aspire with Azure Container Apps, including infrastructure provisioning",
        metadata={"method": "aspire", "platforms": ["azure"]},
        keywords=["aspire", "container apps", ".net"],
    ),
    CatalogEntry(
        id="HelmDeployment.md",
        description="Deploy FeatBit on Kubernetes clusters using Helm charts for orchestration",
        metadata={"method": "helm-charts", "platforms": ["kubernetes", "azure", "aws", "gcp", "on-premises"]},
        keywords=["helm", "k8s", "charts"],
    ),
    CatalogEntry(
        id="TerraformAzureDeployment.md",
        description="Infrastructure as Code deployment to Azure using Terraform",
        metadata={"method": "terraform", "platforms": ["azure"]},
        keywords=["terraform", "iac"],
    ),
    CatalogEntry(
        id="DockerComposeDeployment.md",
        description="Local or on-premises deployment using Docker Compose",
        metadata={"method": "docker-compose", "platforms": ["docker-compose", "on-premises"]},
        keywords=["docker", "compose", "local"],
    ),
    CatalogEntry(
        id=DEFAULT_DEPLOYMENT_DOC,
        description="Overview of all deployment methods and general deployment guidance",
        metadata={"method": "all", "platforms": ["all"]},
        keywords=["overview"],
    ),
]

DEPLOYMENT_PROMPT = SelectionPromptBuilder(
    persona=(
        "You are an expert DevOps engineer helping to select the most appropriate "
        "FeatBit deployment documentation."
    ),
    extra_guidelines=[
        "**Method First**: Match the deployment method first (aspire, helm-charts, terraform, docker-compose)",
        "**Platform Next**: Consider the target platform (azure, aws, gcp, kubernetes, on-premises)",
        "**Most Specific Wins**: If several documents match, choose the most specific one",
        "**Overview**: If uncertain, or if method/platform is \"all\" or \"others\", choose README.md",
    ],
    example_ids=["HelmDeployment.md"],
    example_reason="The user deploys with Helm charts on Kubernetes.",
    metadata_keys=["method", "platforms"],
)


class DeploymentService:
    """Deployment guide lookup backed by the document router."""

    def __init__(self, router: DocumentRouter):
        self.router = router

    @staticmethod
    def register(registry: CatalogRegistry, builder: CatalogBuilder) -> None:
        """Register the static deployments catalog."""
        registry.register(
            DEPLOYMENTS_NAMESPACE,
            builder.provider(DEPLOYMENTS_NAMESPACE, static_entries=DEPLOYMENT_DOCUMENTS),
            resource_path=DEPLOYMENTS_RESOURCE_PATH,
            default_id=DEFAULT_DEPLOYMENT_DOC,
            prompt_builder=DEPLOYMENT_PROMPT,
        )

    async def get_deployment_documentation(self, method: str, platform: str, topic: str = "") -> str:
        """
        Return the content of the best deployment guide.

        Args:
            method: helm-charts, terraform, docker-compose, aspire or others
            platform: azure, aws, gcp, on-premises, kubernetes, docker-compose or all
            topic: What the user wants to learn about
        """
        logger.info(f"Getting deployment documentation for method={method}, platform={platform}, topic={topic}")

        query = topic.strip() or f"Deploy FeatBit with {method} on {platform}"
        content = await self.router.route_query(
            query,
            DEPLOYMENTS_NAMESPACE,
            hints={"method": method, "platform": platform},
        )
        if content.is_empty:
            logger.warning(f"No deployment documentation resolved: {content.reason}")
            return f"No deployment documentation found for method '{method}' on '{platform}'."

        logger.info(f"Successfully loaded deployment document: {', '.join(content.sources)}")
        return content.text

    def get_available_deployment_methods(self) -> List[Dict[str, Any]]:
        return [
            {
                "fileName": entry.id,
                "method": entry.metadata["method"],
                "platforms": ", ".join(entry.metadata["platforms"]),
                "description": entry.description,
            }
            for entry in DEPLOYMENT_DOCUMENTS
        ]
