from .base import DocumentLoader
from .resources_loader import ResourcesDocumentLoader

__all__ = ["DocumentLoader", "ResourcesDocumentLoader"]
