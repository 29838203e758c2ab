from .doc_service import DOCS_NAMESPACE, DocService

__all__ = ["DOCS_NAMESPACE", "DocService"]
