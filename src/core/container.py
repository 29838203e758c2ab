"""Builds the routing services from settings."""
from dataclasses import dataclass
from typing import Optional

from src.core.config import Settings, settings as default_settings
from src.services.deployments import DeploymentService
from src.services.doc_routing import (
    CatalogBuilder,
    CatalogRegistry,
    ContentAssembler,
    DocumentRouter,
    RuleBasedSelector,
    SelectionPromptBuilder,
    Selector,
    SelectorConfig,
)
from src.services.docs import DOCS_NAMESPACE, DocService
from src.services.document_loader import DocumentLoader, ResourcesDocumentLoader
from src.services.feature_flags import FeatureFlagEvaluator, SettingsFeatureFlagEvaluator
from src.services.llm import BaseLLMClient, CostTracker, get_llm_client
from src.services.sdks import SdkService
from src.utils.logging.otel_logger import logger

SECTION_PROMPT = SelectionPromptBuilder(
    persona="You are a FeatBit documentation expert.",
    extra_guidelines=[
        "**Consider Context**: Think about the user's level (beginner vs advanced) and goal (learning vs troubleshooting)",
    ],
    example_ids=["Feature Flags"],
    example_reason="The user is asking about targeting rules, which is a core feature flag management topic.",
)

PAGE_PROMPT = SelectionPromptBuilder(
    persona="You are a full-stack software engineer selecting FeatBit documentation pages.",
    example_ids=[
        "https://docs.featbit.co/feature-flags/targeting-rules",
        "https://docs.featbit.co/feature-flags/segments",
    ],
    example_reason="Targeting rules answer the question directly; segments add context on user grouping.",
)


@dataclass
class Services:
    registry: CatalogRegistry
    router: DocumentRouter
    deployments: DeploymentService
    sdks: SdkService
    docs: DocService
    cost_tracker: CostTracker


def build_services(
    settings: Optional[Settings] = None,
    llm_client: Optional[BaseLLMClient] = None,
    loader: Optional[DocumentLoader] = None,
    feature_flags: Optional[FeatureFlagEvaluator] = None,
) -> Services:
    """
    Wire loader, LLM client, selectors and domain services together.

    Catalogs are only registered here; they are built on first use.
    """
    settings = settings or default_settings
    llm_client = llm_client or get_llm_client(settings)
    loader = loader or ResourcesDocumentLoader(settings.RESOURCES_PATH)
    feature_flags = feature_flags or SettingsFeatureFlagEvaluator(settings.enabled_feature_flags)
    cost_tracker = CostTracker(provider=llm_client.provider_name, model=llm_client.model)

    config = SelectorConfig(
        max_attempts=settings.SELECTION_MAX_ATTEMPTS,
        backoff_seconds=settings.SELECTION_BACKOFF_SECONDS,
        temperature=settings.LLM_TEMPERATURE,
        max_tokens=settings.LLM_MAX_TOKENS,
        attempt_timeout_seconds=settings.SELECTION_ATTEMPT_TIMEOUT_SECONDS or None,
    )

    def selector(prompt_builder: Optional[SelectionPromptBuilder] = None) -> Selector:
        return Selector(
            llm_client,
            prompt_builder=prompt_builder,
            config=config,
            rule_selector=RuleBasedSelector(),
            cost_tracker=cost_tracker,
        )

    registry = CatalogRegistry()
    builder = CatalogBuilder(loader)
    assembler = ContentAssembler(loader, max_urls=settings.DOC_URL_LIMIT)
    router = DocumentRouter(registry, selector(), assembler)

    DeploymentService.register(registry, builder)
    SdkService.register_catalogs(registry, builder)

    docs = DocService(
        loader,
        section_selector=selector(SECTION_PROMPT),
        page_selector=selector(PAGE_PROMPT),
        assembler=assembler,
        feature_flags=feature_flags,
        max_urls=settings.DOC_URL_LIMIT,
    )
    router.register_url_namespace(DOCS_NAMESPACE, docs.narrower)

    services = Services(
        registry=registry,
        router=router,
        deployments=DeploymentService(router),
        sdks=SdkService.create(router, registry, assembler),
        docs=docs,
        cost_tracker=cost_tracker,
    )
    logger.info(f"Routing services ready: namespaces={router.namespaces}, llm={llm_client.provider_name}")
    return services
