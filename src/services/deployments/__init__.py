from .deployment_service import DEFAULT_DEPLOYMENT_DOC, DEPLOYMENT_DOCUMENTS, DEPLOYMENTS_NAMESPACE, DeploymentService

__all__ = ["DEFAULT_DEPLOYMENT_DOC", "DEPLOYMENT_DOCUMENTS", "DEPLOYMENTS_NAMESPACE", "DeploymentService"]
