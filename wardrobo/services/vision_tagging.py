"""Vision-model auto-tagging for uploaded garment photos.

Tagging is best effort: every failure path yields an empty extraction and the
upload proceeds with defaults.
"""

from __future__ import annotations

import base64
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from wardrobo.utils.catalog import CATEGORY_TOP, normalize_category
from wardrobo.utils.tags import feature_tokens_for, normalize_colors

from .llm_client import ChatCompletionClient, LLMConfig, LLMError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an assistant that extracts apparel attributes from an image. "
    "Return ONLY JSON with keys: "
    "primaryColor (string|nullable lowercase), "
    "colors (array of lowercase strings), "
    "category (one of: TOP,BOTTOM,OUTERWEAR,FOOTWEAR,ACCESSORY,DRESS or null), "
    "clothingType (REQUIRED; one of: tshirt, shirt, jeans, jacket, dress, skirt, shorts, "
    "sweater, sweatshirt, hoodie, coat, blouse, pants), "
    "sleeve (short,long,sleeveless|null), "
    "pattern (striped,dotted,floral,solid,graphic|null), "
    "graphicDescription (string describing any prints, logos, animals, text, or designs on the garment|null), "
    "closure (zipper,buttons,none|null), "
    "features (array of short tokens like 'zipper','buttons','stripe','hood','crewneck','v-neck')."
)
USER_PROMPT = "Analyze the image and return the JSON object only."


@dataclass
class ItemAttributes:
    """Catalog fields inferred from a vision extraction."""

    category: str = CATEGORY_TOP
    primary_color: Optional[str] = None
    colors: List[str] = field(default_factory=list)
    features: List[str] = field(default_factory=list)


def derive_item_attributes(vision: Optional[Dict[str, Any]]) -> ItemAttributes:
    vision = vision or {}
    primary = vision.get("primaryColor")
    primary = primary.strip().lower() if isinstance(primary, str) else ""
    category = vision.get("category")
    return ItemAttributes(
        category=normalize_category(category if isinstance(category, str) else None) or CATEGORY_TOP,
        primary_color=primary or None,
        colors=normalize_colors(vision.get("colors")),
        features=feature_tokens_for(vision),
    )


def image_data_url(image_bytes: bytes, content_type: Optional[str]) -> str:
    encoded = base64.b64encode(image_bytes).decode("ascii")
    return f"data:{content_type or 'image/jpeg'};base64,{encoded}"


class VisionTaggingService:
    """Sends a photo to the vision model and returns its JSON extraction."""

    def __init__(self, client: Optional[ChatCompletionClient] = None, config: Optional[LLMConfig] = None):
        self.client = client or ChatCompletionClient(config)

    @property
    def is_enabled(self) -> bool:
        return self.client.config.is_configured

    def analyze(
        self,
        image_bytes: Optional[bytes],
        content_type: Optional[str],
        public_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        if not self.is_enabled:
            return {}

        if image_bytes:
            image_url = image_data_url(image_bytes, content_type)
        elif public_url:
            image_url = public_url
        else:
            return {}

        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": USER_PROMPT},
                    {"type": "image_url", "image_url": {"url": image_url}},
                ],
            },
        ]
        try:
            content = self.client.complete(
                messages,
                model=self.client.config.vision_model,
                temperature=0,
                max_tokens=300,
                response_format={"type": "json_object"},
                timeout=self.client.config.vision_timeout_seconds,
            )
        except LLMError as exc:
            logger.warning("Vision tagging skipped: %s", exc)
            return {}

        try:
            parsed = json.loads(content or "{}")
        except ValueError:
            logger.warning("Vision tagging reply was not JSON; ignoring")
            return {}
        if not isinstance(parsed, dict):
            return {}
        logger.info("vision_tagging: keys=%s", sorted(parsed.keys()))
        return parsed


_vision_tagging_service: Optional[VisionTaggingService] = None


def get_vision_tagging_service() -> VisionTaggingService:
    global _vision_tagging_service
    if _vision_tagging_service is None:
        _vision_tagging_service = VisionTaggingService()
    return _vision_tagging_service


def reset_vision_tagging_service_for_tests() -> None:
    global _vision_tagging_service
    _vision_tagging_service = None
