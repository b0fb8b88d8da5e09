"""Canonical taxonomy definitions for wardrobe items and requests.

This module centralises the closed vocabularies used across the service:
item categories, formality tiers and budget tiers, plus the tag sets the
scorer rewards for each formality tier. Helper functions keep validation
logic consistent across the stores, schemas and the recommendation logic.
"""

from typing import Dict, Iterable, List, Tuple


def _normalize_key(value: str) -> str:
    """Normalise a free-form string into a taxonomy key."""

    return value.strip().lower()


CATEGORIES: Tuple[str, ...] = ("top", "bottom", "shoes", "accessory", "outerwear")
REQUIRED_CATEGORIES: Tuple[str, ...] = ("top", "bottom", "shoes")

FORMALITY_LEVELS: Tuple[str, ...] = ("casual", "business-casual", "semi-formal", "formal")
BUDGET_LEVELS: Tuple[str, ...] = ("low", "medium", "high", "any")

COMFORTABLE_TAG = "comfortable"
HIGH_COMFORT_THRESHOLD = 7

FORMALITY_TAGS: Dict[str, Tuple[str, ...]] = {
    "casual": ("casual", "comfortable"),
    "business-casual": ("business-casual", "versatile"),
    "formal": ("formal", "professional"),
    "semi-formal": ("formal", "professional", "elegant"),
}


def validate_category(value: str) -> str:
    """Validate and normalise a category value.

    Raises a :class:`ValueError` if the category is not part of the canonical
    taxonomy.
    """

    key = _normalize_key(value)
    if key not in CATEGORIES:
        raise ValueError(f"Unsupported category '{value}'. Allowed: {sorted(CATEGORIES)}")
    return key


def validate_formality(value: str) -> str:
    key = _normalize_key(value)
    if key not in FORMALITY_LEVELS:
        raise ValueError(f"Unsupported formality '{value}'. Allowed: {list(FORMALITY_LEVELS)}")
    return key


def validate_budget(value: str) -> str:
    key = _normalize_key(value)
    if key not in BUDGET_LEVELS:
        raise ValueError(f"Unsupported budget '{value}'. Allowed: {list(BUDGET_LEVELS)}")
    return key


def formality_target_tags(formality: str) -> Tuple[str, ...]:
    """Return the tags rewarded for a formality tier; unknown tiers reward nothing."""

    return FORMALITY_TAGS.get(formality, ())


def formality_prefix(formality: str) -> str:
    """Return the part of a formality tier before its first hyphen.

    ``business-casual`` becomes ``business`` and ``semi-formal`` becomes
    ``semi``. The latter rarely appears inside any tag, so the semi-formal tier
    effectively skips tag filtering when picking the primary outfit.
    """

    return formality.split("-", 1)[0]


def normalise_tags(values: Iterable[str]) -> List[str]:
    """Trim and deduplicate free-text tags, keeping first-seen order and case."""

    normalised = []
    seen = set()
    for value in values:
        tag = str(value).strip()
        if tag and tag not in seen:
            normalised.append(tag)
            seen.add(tag)
    return normalised


def has_required_categories(categories: Iterable[str]) -> bool:
    present = set(categories)
    return all(category in present for category in REQUIRED_CATEGORIES)


__all__ = [
    "CATEGORIES",
    "REQUIRED_CATEGORIES",
    "FORMALITY_LEVELS",
    "BUDGET_LEVELS",
    "COMFORTABLE_TAG",
    "HIGH_COMFORT_THRESHOLD",
    "FORMALITY_TAGS",
    "validate_category",
    "validate_formality",
    "validate_budget",
    "formality_target_tags",
    "formality_prefix",
    "normalise_tags",
    "has_required_categories",
]
