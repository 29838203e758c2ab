"""
SDK integration documentation routing.

Each supported SDK identifier is registered with a guide provider: .NET
SDKs pick between several guides by topic, every other SDK maps to fixed
files.
"""

from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

from src.services.doc_routing import (
    CatalogBuilder,
    CatalogRegistry,
    ContentAssembler,
    DocumentRouter,
    SelectionPromptBuilder,
)
from src.utils.logging.otel_logger import logger

from .sdk_guides import RoutedSdkGuide, SdkGuide, StaticSdkGuide

DOTNET_NAMESPACE = "sdks/dotnet"
DOTNET_RESOURCE_PATH = "Sdks/DotNETSdks"
DOTNET_DOCUMENTS = ["NetServerSdkAspNetCore.md", "NetServerSdkConsole.md"]

JAVASCRIPT_RESOURCE_PATH = "Sdks/JavascriptSdks"
JAVASCRIPT_FILES: Dict[str, List[str]] = {
    "javascript-client-sdk": ["featbit-js-client-sdk.md"],
    "typescript-client-sdk": ["featbit-js-client-sdk.md"],
    "react-webapp-sdk": ["featbit-react-client-sdk.md"],
    "react-native-sdk": ["featbit-react-native-client-sdk.md"],
    "node-sdk": ["featbit-node-server-sdk.md"],
    "openfeature-js-client-sdk": ["featbit-openfeature-provider-js-client.md", "featbit-js-client-sdk.md"],
    "openfeature-node-sdk": ["featbit-openfeature-provider-node-server.md", "featbit-node-server-sdk.md"],
}

DOTNET_PROMPT = SelectionPromptBuilder(
    persona=(
        "You are an expert .NET developer assistant helping to select the most appropriate "
        "FeatBit SDK documentation."
    ),
    extra_guidelines=[
        "**ASP.NET Core**: web applications, REST APIs, GraphQL, hosted web services, middleware scenarios",
        "**Console**: background workers, scheduled jobs, CLI tools, non-web services, batch processing",
        "**Ambiguous**: prefer ASP.NET Core as it is more commonly used",
    ],
    example_ids=["NetServerSdkAspNetCore.md"],
    example_reason="The user is building an ASP.NET Core Web API.",
)


@dataclass(frozen=True)
class SdkInfo:
    sdk: str
    language: str
    type: str
    description: str


SUPPORTED_SDKS: List[SdkInfo] = [
    SdkInfo("dotnet-server-sdk", ".NET", "Server", "ASP.NET Core, Web APIs, Background Services"),
    SdkInfo("dotnet-console-sdk", ".NET", "Server", "Console Applications, CLI Tools"),
    SdkInfo("dotnet-client-sdk", ".NET", "Client", "Desktop, Mobile (MAUI, Xamarin)"),
    SdkInfo("javascript-client-sdk", "JavaScript", "Client", "Vanilla JavaScript for Web"),
    SdkInfo("typescript-client-sdk", "TypeScript", "Client", "TypeScript for Web"),
    SdkInfo("react-webapp-sdk", "React", "Client", "React Web Applications"),
    SdkInfo("react-native-sdk", "React Native", "Client", "React Native Mobile Apps"),
    SdkInfo("node-sdk", "Node.js", "Server", "Node.js Backend Services"),
    SdkInfo("openfeature-node-sdk", "Node.js", "Server", "OpenFeature Node.js Provider"),
    SdkInfo("openfeature-js-client-sdk", "JavaScript", "Client", "OpenFeature JavaScript Provider"),
    SdkInfo("java-sdk", "Java", "Server", "Java Backend Services"),
    SdkInfo("java-server-sdk", "Java", "Server", "Java Backend Services"),
    SdkInfo("python-sdk", "Python", "Server", "Python Backend Services"),
    SdkInfo("python-server-sdk", "Python", "Server", "Python Backend Services"),
    SdkInfo("go-sdk", "Go", "Server", "Go Backend Services"),
    SdkInfo("go-server-sdk", "Go", "Server", "Go Backend Services"),
]


def normalize_sdk_id(sdk: str) -> str:
    return (sdk or "").strip().lower()


class SdkService:
    """SDK identifier -> guide provider registry."""

    def __init__(self):
        self._guides: Dict[str, SdkGuide] = {}
        self._info: Dict[str, SdkInfo] = {}

    def register(self, info: SdkInfo, guide: SdkGuide) -> None:
        key = normalize_sdk_id(info.sdk)
        if key in self._guides:
            raise ValueError(f"SDK already registered: {key}")
        self._guides[key] = guide
        self._info[key] = info

    @classmethod
    def create(
        cls,
        router: DocumentRouter,
        registry: CatalogRegistry,
        assembler: ContentAssembler,
    ) -> "SdkService":
        """Service with every supported SDK registered."""
        service = cls()
        dotnet = RoutedSdkGuide(router, registry, DOTNET_NAMESPACE)
        static_files = {
            "java-sdk": ("Sdks/JavaSdks", ["featbit-java-sdk.md"]),
            "java-server-sdk": ("Sdks/JavaSdks", ["featbit-java-sdk.md"]),
            "python-sdk": ("Sdks/PythonSdks", ["featbit-python-sdk.md"]),
            "python-server-sdk": ("Sdks/PythonSdks", ["featbit-python-sdk.md"]),
            "go-sdk": ("Sdks/GoSdks", ["featbit-go-sdk.md"]),
            "go-server-sdk": ("Sdks/GoSdks", ["featbit-go-sdk.md"]),
        }
        static_files.update({sdk: (JAVASCRIPT_RESOURCE_PATH, files) for sdk, files in JAVASCRIPT_FILES.items()})

        for info in SUPPORTED_SDKS:
            if info.language == ".NET":
                service.register(info, dotnet)
            else:
                resource_path, files = static_files[info.sdk]
                service.register(info, StaticSdkGuide(assembler, resource_path, files))
        return service

    @staticmethod
    def register_catalogs(registry: CatalogRegistry, builder: CatalogBuilder) -> None:
        """Register the .NET guide catalog (descriptions read from front matter)."""
        registry.register(
            DOTNET_NAMESPACE,
            builder.provider(DOTNET_NAMESPACE, resource_path=DOTNET_RESOURCE_PATH, document_ids=DOTNET_DOCUMENTS),
            resource_path=DOTNET_RESOURCE_PATH,
            default_id=DOTNET_DOCUMENTS[0],
            prompt_builder=DOTNET_PROMPT,
        )

    def is_supported(self, sdk: str) -> bool:
        return normalize_sdk_id(sdk) in self._guides

    async def get_sdk_documentation(self, sdk: str, topic: str = "") -> str:
        """
        Return integration documentation for ``sdk``.

        Unknown identifiers get a help message listing the supported SDKs
        instead of an error.
        """
        logger.info(f"Getting SDK documentation for sdk={sdk}, topic={topic}")

        guide: Optional[SdkGuide] = self._guides.get(normalize_sdk_id(sdk))
        if guide is None:
            logger.warning(f"Unknown SDK identifier: {sdk}")
            return self._unknown_sdk_message(sdk)

        content = await guide.generate(normalize_sdk_id(sdk), topic)
        if content.is_empty:
            logger.warning(f"No SDK documentation resolved for {sdk}: {content.reason}")
            return f"No documentation found for SDK '{sdk}'."

        logger.info(f"Successfully retrieved SDK documentation for {sdk}")
        return content.text

    def get_supported_sdks(self) -> List[Dict[str, str]]:
        return [asdict(info) for info in self._info.values()]

    def _unknown_sdk_message(self, sdk: str) -> str:
        by_language: Dict[str, List[str]] = {}
        for info in self._info.values():
            by_language.setdefault(info.language, []).append(info.sdk)

        lines = [f"Unknown SDK identifier: '{sdk}'", "", "## Supported SDKs"]
        for language, sdks in by_language.items():
            lines.append("")
            lines.append(f"### {language}")
            lines.extend(f"- {name}" for name in sdks)
        lines.append("")
        lines.append("Please choose one of the supported SDK identifiers and try again.")
        return "\n".join(lines)
