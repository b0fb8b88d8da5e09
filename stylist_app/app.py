"""Service bootstrap."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from typing import Dict

from agents.feedback_agent import FeedbackAgent
from agents.outfit_stylist import OutfitStylistAgent
from stylist_app.config import AppConfig
from stylist_app.logging_config import configure_logging, get_logger, log_event
from tools.recommendation_store import RecommendationStore, SQLiteRecommendationStore
from tools.wardrobe_store import SQLiteWardrobeStore, WardrobeStore
from tools.wardrobe_tools import WardrobeTools

LOGGER = get_logger(__name__)


class WardrobeStylistApp:
    """Wires together configuration, stores and agents.

    Stores may be injected, which is how tests run the full flow against an
    in-memory wardrobe or a temporary database.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        wardrobe_store: WardrobeStore | None = None,
        recommendation_store: RecommendationStore | None = None,
    ) -> None:
        self.config = config or AppConfig.from_env()
        configure_logging(self.config.log_level)

        self.wardrobe_store = wardrobe_store or SQLiteWardrobeStore(self.config.database_path)
        self.recommendation_store = recommendation_store or SQLiteRecommendationStore(
            self.config.database_path
        )
        self.wardrobe_tools = WardrobeTools(self.wardrobe_store)
        self.outfit_stylist = OutfitStylistAgent(
            wardrobe_tools=self.wardrobe_tools, recommendation_store=self.recommendation_store
        )
        self.feedback_agent = FeedbackAgent(
            wardrobe_tools=self.wardrobe_tools, recommendation_store=self.recommendation_store
        )
        log_event(
            LOGGER,
            logging.INFO,
            "app_initialised",
            environment=self.config.environment or "local",
            database_path=self.config.database_path,
        )

    def health(self) -> Dict[str, object]:
        """Report whether the wardrobe database answers a trivial query."""

        timestamp = datetime.now(timezone.utc).isoformat()
        try:
            self.wardrobe_store.ping()
        except sqlite3.Error:
            log_event(LOGGER, logging.ERROR, "health_check_failed", exc_info=True)
            return {
                "status": "error",
                "timestamp": timestamp,
                "database": "disconnected",
                "error": "Database connection failed",
            }
        return {
            "status": "ok",
            "timestamp": timestamp,
            "database": "connected",
            "port": self.config.port,
        }


__all__ = ["WardrobeStylistApp"]
