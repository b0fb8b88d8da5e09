"""Feedback capture and recommendation history."""
from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Dict, List, Mapping

from pydantic import ValidationError

from agents.outfit_stylist import request_to_payload
from logic.validation import FeedbackInput, validation_failure
from models.recommendation import Feedback, Outfit
from stylist_app.logging_config import get_logger, log_event, operation_context
from tools.recommendation_store import RecommendationStore
from tools.wardrobe_store import serialise_timestamp
from tools.wardrobe_tools import WardrobeTools, item_to_payload

logger = get_logger(__name__)


def feedback_to_payload(feedback: Feedback) -> Dict[str, Any]:
    payload = asdict(feedback)
    payload["created_at"] = serialise_timestamp(feedback.created_at)
    return payload


class FeedbackAgent:
    """Records ratings and assembles the history shown to the user."""

    def __init__(self, wardrobe_tools: WardrobeTools, recommendation_store: RecommendationStore) -> None:
        self.wardrobe_tools = wardrobe_tools
        self.recommendation_store = recommendation_store

    def _outfit_payload(self, outfit: Outfit) -> Dict[str, Any]:
        # Items deleted since the outfit was generated are left out.
        items = [self.wardrobe_tools.store.get_item(item_id) for item_id in outfit.item_ids]
        return {
            "outfit_id": outfit.outfit_id,
            "request_id": outfit.request_id,
            "items": [item_to_payload(item) for item in items if item is not None],
            "score": outfit.score,
            "rationale": outfit.rationale,
            "created_at": serialise_timestamp(outfit.created_at),
        }

    def record_feedback(self, payload: FeedbackInput | Mapping[str, Any]) -> Dict[str, Any]:
        """Store a rating for an outfit that belongs to the given request."""

        with operation_context("agent:feedback.record_feedback") as correlation_id:
            try:
                feedback_input = (
                    payload if isinstance(payload, FeedbackInput) else FeedbackInput.model_validate(dict(payload))
                )
            except ValidationError as exc:
                return validation_failure("Invalid feedback", exc)

            request = self.recommendation_store.get_request(feedback_input.request_id)
            if request is None:
                return {"status": "not_found", "message": "Recommendation request not found"}
            outfit = self.recommendation_store.get_outfit(feedback_input.outfit_id)
            if outfit is None:
                return {"status": "not_found", "message": "Outfit not found"}
            if outfit.request_id != request.request_id:
                log_event(
                    logger,
                    logging.WARNING,
                    "feedback_outfit_mismatch",
                    correlation_id=correlation_id,
                    request_id=request.request_id,
                    outfit_id=outfit.outfit_id,
                )
                return {"status": "invalid", "message": "Outfit does not belong to this request", "details": []}

            feedback = self.recommendation_store.create_feedback(
                Feedback(
                    request_id=request.request_id,
                    outfit_id=outfit.outfit_id,
                    rating=feedback_input.rating,
                    comment=feedback_input.comment,
                    selected=feedback_input.selected,
                )
            )
            log_event(
                logger,
                logging.INFO,
                "feedback_recorded",
                correlation_id=correlation_id,
                feedback_id=feedback.feedback_id,
                rating=feedback.rating,
                selected=feedback.selected,
            )
            return {"status": "ok", "feedback": feedback_to_payload(feedback)}

    def list_feedback(self) -> List[Dict[str, Any]]:
        """Return feedback newest first, each with its request and outfit."""

        entries = []
        for feedback in self.recommendation_store.list_feedback():
            request = self.recommendation_store.get_request(feedback.request_id)
            outfit = self.recommendation_store.get_outfit(feedback.outfit_id)
            entries.append(
                {
                    **feedback_to_payload(feedback),
                    "request": request_to_payload(request) if request else None,
                    "outfit": self._outfit_payload(outfit) if outfit else None,
                }
            )
        return entries

    def recommendation_history(self) -> List[Dict[str, Any]]:
        """Return every stored request, newest first, with its outfits and feedback."""

        with operation_context("agent:feedback.recommendation_history"):
            history = []
            for request in self.recommendation_store.list_requests():
                outfits = self.recommendation_store.list_outfits_for_request(request.request_id)
                history.append(
                    {
                        **request_to_payload(request),
                        "outfits": [self._outfit_payload(outfit) for outfit in outfits],
                        "feedbacks": [
                            feedback_to_payload(feedback)
                            for feedback in self.recommendation_store.list_feedback(request.request_id)
                        ],
                    }
                )
            log_event(logger, logging.INFO, "history_loaded", request_count=len(history))
            return history


__all__ = ["FeedbackAgent", "feedback_to_payload"]
