"""Business logic services package with public service helpers."""

from .llm_client import (
    ChatCompletionClient,
    LLMAPIError,
    LLMConfig,
    LLMConfigurationError,
    LLMError,
)
from .filter_extraction import (
    FilterExtraction,
    FilterExtractionService,
    get_filter_extraction_service,
    reset_filter_extraction_service_for_tests,
)
from .vision_tagging import (
    VisionTaggingService,
    get_vision_tagging_service,
    reset_vision_tagging_service_for_tests,
)
from .storage import (
    StorageError,
    get_image_storage,
    reset_image_storage_for_tests,
)

__all__ = [
    "ChatCompletionClient",
    "LLMAPIError",
    "LLMConfig",
    "LLMConfigurationError",
    "LLMError",
    "FilterExtraction",
    "FilterExtractionService",
    "get_filter_extraction_service",
    "reset_filter_extraction_service_for_tests",
    "VisionTaggingService",
    "get_vision_tagging_service",
    "reset_vision_tagging_service_for_tests",
    "StorageError",
    "get_image_storage",
    "reset_image_storage_for_tests",
]
