"""Natural-language prompt to structured catalog filters."""

from __future__ import annotations

import json
import logging
import math
import re
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from .llm_client import ChatCompletionClient, LLMConfig

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "Extract structured clothing search filters from the user's request. "
    "Return ONLY a compact JSON object with keys: category, color, search, brand, priceMin, priceMax. "
    "category must be one of: TOP, BOTTOM, OUTERWEAR, FOOTWEAR, ACCESSORY, DRESS, or null. "
    "color should be a lowercase simple color word if present (e.g., blue). "
    "search is a concise keyword phrase (e.g., 'blue t shirt'). "
    "brand is a single brand name if present. "
    "priceMin/priceMax are numbers if mentioned, else null."
)

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


@dataclass
class FilterExtraction:
    category: Optional[str] = None
    color: Optional[str] = None
    search: Optional[str] = None
    brand: Optional[str] = None
    price_min: Optional[float] = None
    price_max: Optional[float] = None

    def to_metadata(self) -> Dict[str, Any]:
        return asdict(self)


def _coerce_string(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _coerce_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        finite = math.isfinite(value)
    except OverflowError:
        # Integers beyond float range
        return None
    return value if finite else None


def normalize_extraction(raw: Any) -> FilterExtraction:
    """Keep only well-typed values from a model reply; anything else is dropped."""
    if not isinstance(raw, dict):
        return FilterExtraction()
    category = _coerce_string(raw.get("category"))
    color = _coerce_string(raw.get("color"))
    return FilterExtraction(
        category=category.upper() if category is not None else None,
        color=color.lower() if color is not None else None,
        search=_coerce_string(raw.get("search")),
        brand=_coerce_string(raw.get("brand")),
        price_min=_coerce_number(raw.get("priceMin")),
        price_max=_coerce_number(raw.get("priceMax")),
    )


def parse_extraction_content(content: Optional[str]) -> FilterExtraction:
    """Parse the JSON object embedded in a model reply; failures give an empty extraction."""
    if not content or not isinstance(content, str):
        return FilterExtraction()
    match = _JSON_OBJECT.search(content)
    json_text = match.group(0) if match else content
    try:
        parsed = json.loads(json_text)
    except ValueError:
        logger.info("Filter extraction reply was not JSON; using empty filters")
        return FilterExtraction()
    return normalize_extraction(parsed)


class FilterExtractionService:
    """Asks the chat model to turn a shopper's prompt into filters."""

    def __init__(self, client: Optional[ChatCompletionClient] = None, config: Optional[LLMConfig] = None):
        self.client = client or ChatCompletionClient(config)

    def extract(self, prompt: str) -> FilterExtraction:
        """Raises LLMConfigurationError / LLMAPIError on upstream problems."""
        content = self.client.complete(
            [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            model=self.client.config.chat_model,
            temperature=0,
            max_tokens=200,
        )
        extraction = parse_extraction_content(content)
        logger.info("filter_extraction: prompt=%r extracted=%s", prompt, extraction.to_metadata())
        return extraction


_filter_extraction_service: Optional[FilterExtractionService] = None


def get_filter_extraction_service() -> FilterExtractionService:
    global _filter_extraction_service
    if _filter_extraction_service is None:
        _filter_extraction_service = FilterExtractionService()
    return _filter_extraction_service


def reset_filter_extraction_service_for_tests() -> None:
    global _filter_extraction_service
    _filter_extraction_service = None
