"""Persistence for recommendation requests, outfits and feedback."""
from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import List, Optional

from models.recommendation import Feedback, Outfit, RecommendationRequest
from tools.wardrobe_store import SQLiteDatabase, deserialise_timestamp, serialise_timestamp


class RecommendationStore:
    """Persistence interface for the recommendation history."""

    def create_request(self, request: RecommendationRequest) -> RecommendationRequest:
        raise NotImplementedError

    def get_request(self, request_id: str) -> Optional[RecommendationRequest]:
        raise NotImplementedError

    def list_requests(self) -> List[RecommendationRequest]:
        raise NotImplementedError

    def create_outfit(self, outfit: Outfit) -> Outfit:
        raise NotImplementedError

    def get_outfit(self, outfit_id: str) -> Optional[Outfit]:
        raise NotImplementedError

    def list_outfits_for_request(self, request_id: str) -> List[Outfit]:
        raise NotImplementedError

    def create_feedback(self, feedback: Feedback) -> Feedback:
        raise NotImplementedError

    def list_feedback(self, request_id: Optional[str] = None) -> List[Feedback]:
        raise NotImplementedError


class SQLiteRecommendationStore(SQLiteDatabase, RecommendationStore):
    """SQLite-backed history of requests, generated outfits and ratings.

    Writes are independent: a request row may exist without outfits if a later
    write fails, and outfit item rows keep pointing at wardrobe items even
    after those items are deleted.
    """

    def __init__(self, database_path: str | Path = "data/wardrobe.db") -> None:
        super().__init__(database_path)
        self._ensure_tables()

    def _ensure_tables(self) -> None:
        with self._connect() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS recommendation_requests (
                    request_id TEXT PRIMARY KEY,
                    occasion TEXT NOT NULL,
                    style TEXT NOT NULL,
                    formality TEXT NOT NULL,
                    comfort INTEGER NOT NULL,
                    budget TEXT NOT NULL,
                    constraints TEXT,
                    created_at TEXT NOT NULL
                );
                CREATE TABLE IF NOT EXISTS outfits (
                    outfit_id TEXT PRIMARY KEY,
                    request_id TEXT NOT NULL,
                    score INTEGER NOT NULL,
                    rationale TEXT NOT NULL,
                    created_at TEXT NOT NULL
                );
                CREATE TABLE IF NOT EXISTS outfit_items (
                    outfit_id TEXT NOT NULL,
                    item_id TEXT NOT NULL,
                    position INTEGER NOT NULL,
                    PRIMARY KEY (outfit_id, item_id)
                );
                CREATE TABLE IF NOT EXISTS feedback (
                    feedback_id TEXT PRIMARY KEY,
                    request_id TEXT NOT NULL,
                    outfit_id TEXT NOT NULL,
                    rating INTEGER NOT NULL,
                    comment TEXT,
                    selected INTEGER NOT NULL DEFAULT 0,
                    created_at TEXT NOT NULL
                );
                CREATE INDEX IF NOT EXISTS idx_outfits_request ON outfits (request_id);
                CREATE INDEX IF NOT EXISTS idx_feedback_request ON feedback (request_id);
                """
            )

    def _row_to_request(self, row: sqlite3.Row) -> RecommendationRequest:
        return RecommendationRequest(
            request_id=row["request_id"],
            occasion=row["occasion"],
            style=row["style"],
            formality=row["formality"],
            comfort=row["comfort"],
            budget=row["budget"],
            constraints=tuple(self._deserialise_list(row["constraints"])),
            created_at=deserialise_timestamp(row["created_at"]),
        )

    def _row_to_feedback(self, row: sqlite3.Row) -> Feedback:
        return Feedback(
            feedback_id=row["feedback_id"],
            request_id=row["request_id"],
            outfit_id=row["outfit_id"],
            rating=row["rating"],
            comment=row["comment"],
            selected=bool(row["selected"]),
            created_at=deserialise_timestamp(row["created_at"]),
        )

    def _load_outfits(self, conn: sqlite3.Connection, rows: List[sqlite3.Row]) -> List[Outfit]:
        outfits = []
        for row in rows:
            item_rows = conn.execute(
                "SELECT item_id FROM outfit_items WHERE outfit_id = ? ORDER BY position",
                (row["outfit_id"],),
            ).fetchall()
            outfits.append(
                Outfit(
                    outfit_id=row["outfit_id"],
                    request_id=row["request_id"],
                    item_ids=tuple(item_row["item_id"] for item_row in item_rows),
                    score=row["score"],
                    rationale=row["rationale"],
                    created_at=deserialise_timestamp(row["created_at"]),
                )
            )
        return outfits

    def create_request(self, request: RecommendationRequest) -> RecommendationRequest:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO recommendation_requests (
                    request_id, occasion, style, formality, comfort, budget, constraints, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    request.request_id,
                    request.occasion,
                    request.style,
                    request.formality,
                    request.comfort,
                    request.budget,
                    self._serialise_list(request.constraints),
                    serialise_timestamp(request.created_at),
                ),
            )
        return request

    def get_request(self, request_id: str) -> Optional[RecommendationRequest]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM recommendation_requests WHERE request_id = ?", (request_id,)
            ).fetchone()
            return self._row_to_request(row) if row else None

    def list_requests(self) -> List[RecommendationRequest]:
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT * FROM recommendation_requests ORDER BY created_at DESC, rowid DESC"
            )
            return [self._row_to_request(row) for row in cursor.fetchall()]

    def create_outfit(self, outfit: Outfit) -> Outfit:
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO outfits (outfit_id, request_id, score, rationale, created_at) VALUES (?, ?, ?, ?, ?)",
                (
                    outfit.outfit_id,
                    outfit.request_id,
                    outfit.score,
                    outfit.rationale,
                    serialise_timestamp(outfit.created_at),
                ),
            )
            conn.executemany(
                "INSERT INTO outfit_items (outfit_id, item_id, position) VALUES (?, ?, ?)",
                [(outfit.outfit_id, item_id, position) for position, item_id in enumerate(outfit.item_ids)],
            )
        return outfit

    def get_outfit(self, outfit_id: str) -> Optional[Outfit]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM outfits WHERE outfit_id = ?", (outfit_id,)).fetchall()
            outfits = self._load_outfits(conn, rows)
            return outfits[0] if outfits else None

    def list_outfits_for_request(self, request_id: str) -> List[Outfit]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM outfits WHERE request_id = ? ORDER BY rowid", (request_id,)
            ).fetchall()
            return self._load_outfits(conn, rows)

    def create_feedback(self, feedback: Feedback) -> Feedback:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO feedback (
                    feedback_id, request_id, outfit_id, rating, comment, selected, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    feedback.feedback_id,
                    feedback.request_id,
                    feedback.outfit_id,
                    feedback.rating,
                    feedback.comment,
                    int(feedback.selected),
                    serialise_timestamp(feedback.created_at),
                ),
            )
        return feedback

    def list_feedback(self, request_id: Optional[str] = None) -> List[Feedback]:
        query = "SELECT * FROM feedback"
        params: tuple = ()
        if request_id:
            query += " WHERE request_id = ?"
            params = (request_id,)
        query += " ORDER BY created_at DESC, rowid DESC"
        with self._connect() as conn:
            return [self._row_to_feedback(row) for row in conn.execute(query, params).fetchall()]


__all__ = ["RecommendationStore", "SQLiteRecommendationStore"]
