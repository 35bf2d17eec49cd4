"""
Canonical feature tokens for clothing items.

Vision extractions are flattened into ``prefix:value`` strings stored in the
``materials`` column (``type:tshirt``, ``pattern:striped``, ``graphic:snake``).
Search queries are mapped onto the same vocabulary so that a prompt like
"striped tee" matches items tagged by the vision model.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

TYPE_TOKENS: Dict[str, str] = {
    "tshirt": "type:tshirt",
    "t-shirt": "type:tshirt",
    "tee": "type:tshirt",
    "shirt": "type:shirt",
    "jeans": "type:jeans",
    "pants": "type:pants",
    "trousers": "type:pants",
    "chinos": "type:pants",
    "shorts": "type:shorts",
    "jacket": "type:jacket",
    "coat": "type:coat",
    "blazer": "type:blazer",
    "dress": "type:dress",
    "skirt": "type:skirt",
    "sweater": "type:sweater",
    "sweatshirt": "type:sweatshirt",
    "hoodie": "type:hoodie",
    "blouse": "type:blouse",
}

SLEEVE_TOKENS: Dict[str, str] = {
    "short": "sleeve:short",
    "long": "sleeve:long",
    "sleeveless": "sleeve:sleeveless",
}

# Order matters: the first key contained in the pattern value wins.
PATTERN_TOKENS: Dict[str, str] = {
    "striped": "pattern:striped",
    "stripes": "pattern:striped",
    "dotted": "pattern:dotted",
    "polka": "pattern:dotted",
    "polka-dot": "pattern:dotted",
    "floral": "pattern:floral",
    "flower": "pattern:floral",
    "solid": "pattern:solid",
    "graphic": "pattern:graphic",
}

GRAPHIC_STOP_WORDS = frozenset({"on", "with", "and", "the", "a", "an", "of", "in", "at"})

# Seed data predating vision tagging stores the bare word.
LEGACY_STRIPED_TOKEN = "striped"


def _lower_strings(values: Any) -> List[str]:
    if not isinstance(values, list):
        return []
    return [v.strip().lower() if isinstance(v, str) else "" for v in values]


def _as_lower(value: Any) -> str:
    return value.lower() if isinstance(value, str) else ""


def _dedupe(tokens: Iterable[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for token in tokens:
        if token and token not in seen:
            seen.add(token)
            out.append(token)
    return out


def normalize_colors(values: Any) -> List[str]:
    """Return trimmed, lowercase color names; anything but a list yields []."""
    return [c for c in _lower_strings(values) if c]


def _canonical_feature(value: str) -> str:
    if value.startswith("stripe"):
        value = "pattern:striped"
    if "polka" in value or "dot" in value:
        value = "pattern:dotted"
    if "floral" in value or "flower" in value:
        value = "pattern:floral"
    if value == "zipper":
        value = "closure:zipper"
    if value in ("buttons", "button"):
        value = "closure:buttons"
    return value


def normalize_features(values: Any) -> List[str]:
    """Rewrite free-form feature words into canonical tokens where known."""
    return [_canonical_feature(v) for v in _lower_strings(values) if v]


def graphic_tokens(description: Any) -> List[str]:
    """Tokens for a printed graphic: the full phrase plus each significant word."""
    desc = _as_lower(description).strip()
    if not desc:
        return []
    tokens = [f"graphic:{desc}"]
    for word in re.split(r"[\s,]+", desc):
        word = word.strip()
        if len(word) > 2 and word not in GRAPHIC_STOP_WORDS:
            tokens.append(f"graphic:{word}")
    return tokens


def build_derived_feature_tokens(vision: Mapping[str, Any]) -> List[str]:
    """Derive canonical tokens from the structured fields of a vision extraction."""
    tokens: List[str] = []

    clothing_type = _as_lower(vision.get("clothingType"))
    if clothing_type in TYPE_TOKENS:
        tokens.append(TYPE_TOKENS[clothing_type])

    sleeve = _as_lower(vision.get("sleeve"))
    if sleeve in SLEEVE_TOKENS:
        tokens.append(SLEEVE_TOKENS[sleeve])

    pattern = _as_lower(vision.get("pattern"))
    if pattern:
        for key, token in PATTERN_TOKENS.items():
            if key in pattern:
                tokens.append(token)
                break

    closure = _as_lower(vision.get("closure"))
    if "zip" in closure:
        tokens.append("closure:zipper")
    if "button" in closure:
        tokens.append("closure:buttons")

    features = [_as_lower(f) for f in vision.get("features") or []] if isinstance(vision.get("features"), list) else []
    if any("crew" in f for f in features):
        tokens.append("neck:crew")
    if any("v-neck" in f or "v neck" in f for f in features):
        tokens.append("neck:v")
    if any("polo" in f for f in features):
        tokens.append("type:shirt")

    tokens.extend(graphic_tokens(vision.get("graphicDescription")))
    return tokens


def feature_tokens_for(vision: Optional[Mapping[str, Any]]) -> List[str]:
    """All feature tokens for a vision extraction, without duplicates."""
    if not vision:
        return []
    return _dedupe([
        *normalize_features(vision.get("features")),
        *build_derived_feature_tokens(vision),
    ])


def search_tag_tokens(query: str) -> Tuple[List[str], bool]:
    """Map a free-text search phrase onto feature tokens.

    Returns ``(tokens, include_top_category)``. The flag is set for t-shirt
    words so items without vision tokens still match through their category.
    """
    q = (query or "").lower()
    tokens: List[str] = []
    include_top = False

    if "stripe" in q:
        tokens.extend(["pattern:striped", LEGACY_STRIPED_TOKEN])
    if "polka" in q or "dotted" in q or "dot" in q:
        tokens.append("pattern:dotted")
    if "floral" in q or "flower" in q:
        tokens.append("pattern:floral")

    if "zip" in q:
        tokens.append("closure:zipper")
    if "button" in q:
        tokens.append("closure:buttons")
    if "hood" in q:
        tokens.append("hood")

    if "short sleeve" in q:
        tokens.append("sleeve:short")
    if "long sleeve" in q:
        tokens.append("sleeve:long")
    if "sleeveless" in q:
        tokens.append("sleeve:sleeveless")

    if "t-shirt" in q or "tshirt" in q or "tee" in q:
        tokens.append("type:tshirt")
        include_top = True
    for word in ("shirt", "jeans", "jacket", "dress", "skirt"):
        if word in q:
            tokens.append(f"type:{word}")

    return _dedupe(tokens), include_top
