"""Pydantic schemas and helpers for validating API and agent payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from models.recommendation import RecommendationRequest
from models.taxonomy import validate_budget, validate_category, validate_formality
from models.wardrobe_item import WardrobeItem, from_raw_metadata


class WardrobeItemInput(BaseModel):
    """Create/replace contract for a wardrobe item."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    category: str
    color: str
    tags: List[str] = Field(default_factory=list)
    subcategory: Optional[str] = None
    brand: Optional[str] = None
    size: Optional[str] = None
    material: Optional[str] = None
    pattern: Optional[str] = None
    fit: Optional[str] = None
    season: List[str] = Field(default_factory=list)
    style: List[str] = Field(default_factory=list)
    occasion: List[str] = Field(default_factory=list)
    condition: Optional[str] = None
    warmth: Optional[int] = Field(default=None, ge=1, le=5)
    waterproof: bool = False
    price: Optional[float] = Field(default=None, ge=0)
    purchase_date: Optional[str] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("category")
    @classmethod
    def _validate_category(cls, value: str) -> str:
        return validate_category(value)

    def to_item(self, item_id: str | None = None, created_at: datetime | None = None) -> WardrobeItem:
        """Build the domain item, keeping identity fields when replacing an existing one."""

        metadata: Dict[str, Any] = self.model_dump()
        if item_id:
            metadata["item_id"] = item_id
        if created_at:
            metadata["created_at"] = created_at
        return from_raw_metadata(metadata)


class RecommendationRequestInput(BaseModel):
    """Incoming request for outfit suggestions."""

    model_config = ConfigDict(str_strip_whitespace=True)

    occasion: str = Field(min_length=1)
    style: str = Field(min_length=1)
    formality: str
    comfort: int = Field(ge=1, le=10)
    budget: str
    constraints: List[str] = Field(default_factory=list)

    @field_validator("formality")
    @classmethod
    def _validate_formality(cls, value: str) -> str:
        return validate_formality(value)

    @field_validator("budget")
    @classmethod
    def _validate_budget(cls, value: str) -> str:
        return validate_budget(value)

    def to_domain(self) -> RecommendationRequest:
        return RecommendationRequest(
            occasion=self.occasion,
            style=self.style,
            formality=self.formality,
            comfort=self.comfort,
            budget=self.budget,
            constraints=tuple(self.constraints),
        )


class FeedbackInput(BaseModel):
    """A rating submitted after viewing recommendations."""

    model_config = ConfigDict(str_strip_whitespace=True)

    request_id: str = Field(min_length=1)
    outfit_id: str = Field(min_length=1)
    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = None
    selected: bool = False

    @field_validator("comment")
    @classmethod
    def _blank_comment_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None


class ValidationResult(BaseModel):
    """Wrapper returned to callers when validation fails."""

    status: Literal["invalid"] = "invalid"
    message: str
    details: List[Dict[str, Any]]


def normalize_request(payload: Mapping[str, Any]) -> RecommendationRequest:
    """Validate a raw request payload and return the immutable domain request.

    Raises :class:`pydantic.ValidationError` when required fields are missing,
    enums are unknown or comfort falls outside 1-10.
    """

    return RecommendationRequestInput.model_validate(dict(payload)).to_domain()


def validation_failure(message: str, exc: ValidationError) -> Dict[str, Any]:
    """Translate Pydantic errors into a consistent payload."""

    details = exc.errors(include_url=False, include_context=False)
    return ValidationResult(message=message, details=details).model_dump()


__all__ = [
    "WardrobeItemInput",
    "RecommendationRequestInput",
    "FeedbackInput",
    "ValidationResult",
    "normalize_request",
    "validation_failure",
]
