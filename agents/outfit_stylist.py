"""Outfit stylist agent wiring request storage, selection and outfit persistence."""
from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Dict, Mapping

from pydantic import ValidationError

from logic.outfit_builder import OutfitCandidate, select_outfits
from logic.validation import normalize_request, validation_failure
from models.recommendation import Outfit, RecommendationRequest
from stylist_app.logging_config import get_logger, log_event, operation_context
from tools.recommendation_store import RecommendationStore
from tools.wardrobe_store import serialise_timestamp
from tools.wardrobe_tools import WardrobeTools, item_to_payload

logger = get_logger(__name__)


def request_to_payload(request: RecommendationRequest) -> Dict[str, Any]:
    payload = asdict(request)
    payload["constraints"] = list(request.constraints)
    payload["created_at"] = serialise_timestamp(request.created_at)
    return payload


def _outfit_payload(outfit: Outfit, candidate: OutfitCandidate) -> Dict[str, Any]:
    return {
        "outfit_id": outfit.outfit_id,
        "request_id": outfit.request_id,
        "items": [item_to_payload(item) for item in candidate.items],
        "score": outfit.score,
        "rationale": outfit.rationale,
        "strategy": candidate.strategy,
        "created_at": serialise_timestamp(outfit.created_at),
    }


class OutfitStylistAgent:
    """Builds and records outfit suggestions without any model-driven selection."""

    def __init__(self, wardrobe_tools: WardrobeTools, recommendation_store: RecommendationStore) -> None:
        self.wardrobe_tools = wardrobe_tools
        self.recommendation_store = recommendation_store

    def recommend_outfits(self, request: RecommendationRequest | Mapping[str, Any]) -> Dict[str, object]:
        """Record the request, pick up to three outfits and persist each one.

        An empty ``outfits`` list is a valid answer for a sparse wardrobe.
        Writes are not transactional, so a failure after the request is stored
        leaves that request without outfits.
        """

        with operation_context("agent:stylist.recommend_outfits") as correlation_id:
            if not isinstance(request, RecommendationRequest):
                try:
                    request = normalize_request(request)
                except ValidationError as exc:
                    log_event(
                        logger,
                        logging.WARNING,
                        "recommendation_request_invalid",
                        correlation_id=correlation_id,
                        error_count=exc.error_count(),
                    )
                    return validation_failure("Invalid recommendation request", exc)

            log_event(
                logger,
                logging.INFO,
                "agent_call_started",
                agent="stylist",
                method="recommend_outfits",
                correlation_id=correlation_id,
                request_id=request.request_id,
                formality=request.formality,
                comfort=request.comfort,
            )
            self.recommendation_store.create_request(request)

            wardrobe = self.wardrobe_tools.snapshot()
            candidates = select_outfits(wardrobe, request)

            outfits = []
            for candidate in candidates:
                outfit = Outfit.from_items(
                    request.request_id, candidate.items, candidate.score, candidate.rationale
                )
                self.recommendation_store.create_outfit(outfit)
                outfits.append(_outfit_payload(outfit, candidate))

            if not outfits:
                log_event(
                    logger,
                    logging.WARNING,
                    "no_outfits_generated",
                    correlation_id=correlation_id,
                    request_id=request.request_id,
                    wardrobe_size=len(wardrobe),
                )

            log_event(
                logger,
                logging.INFO,
                "agent_call_completed",
                agent="stylist",
                method="recommend_outfits",
                correlation_id=correlation_id,
                request_id=request.request_id,
                outfit_count=len(outfits),
                strategies=[candidate.strategy for candidate in candidates],
                scores=[candidate.score for candidate in candidates],
            )
            return {
                "status": "ok",
                "request_id": request.request_id,
                "request": request_to_payload(request),
                "outfits": outfits,
            }


__all__ = ["OutfitStylistAgent", "request_to_payload"]
