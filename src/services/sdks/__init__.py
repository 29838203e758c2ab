from .sdk_guides import RoutedSdkGuide, SdkGuide, StaticSdkGuide
from .sdk_service import DOTNET_NAMESPACE, SUPPORTED_SDKS, SdkInfo, SdkService

__all__ = [
    "DOTNET_NAMESPACE",
    "RoutedSdkGuide",
    "SUPPORTED_SDKS",
    "SdkGuide",
    "SdkInfo",
    "SdkService",
    "StaticSdkGuide",
]
