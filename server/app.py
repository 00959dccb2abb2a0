"""FastAPI server for arvo application."""

import logging
from collections import OrderedDict
import os

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field
from typing import Optional

logger = logging.getLogger(__name__)

from core.config import DEFAULT_STORAGE, USER_ID_PATTERN
from core.interfaces import Storage
from core.matching import evaluate_pronunciation
from core.models import CardProgress, SessionStats, VocabularyCard, get_card_progress
from core.scheduler import InvalidRating, record_review, validate_intervals
from core.selection import (
    get_due_cards, filter_cards, learned_count, mastered_count, category_stats
)
from core.utils import utc_now
from core.vocabulary import CATALOG, LEVEL_LABELS, get_card

from server.file_storage import FileStorage


# Pydantic models for API
class ReviewRequest(BaseModel):
    rating: int
    user_id: str = Field("default", pattern=USER_ID_PATTERN)


class PronunciationRequest(BaseModel):
    target: str
    spoken: str = ""
    alternatives: list[str] = []


class ProgressResponse(BaseModel):
    card_id: str
    level: int
    level_label: str
    last_reviewed_at: Optional[str]
    due_at: Optional[str]


class ReviewResponse(BaseModel):
    progress: ProgressResponse
    previous_level: int
    session: dict  # {reviewed, correct, accuracy}


class PronunciationResponse(BaseModel):
    score: int
    tier: str
    normalized_target: str
    transcript: str
    message: str
    passed: bool


class StatusResponse(BaseModel):
    user_id: str
    total_cards: int
    learned_count: int
    mastered_count: int
    due_count: int
    category_stats: dict  # {category: {total, learned, mastered}}
    session: dict


# Global state (in production, use proper DI)
storage: Storage = None
review_intervals: dict[int, int] | None = None  # None uses the default table
session_stats: OrderedDict[str, SessionStats] = OrderedDict()  # user_id -> stats, least recently used first
MAX_TRACKED_SESSIONS = 1000


app = FastAPI(title="Arvo API", description="Aussie slang pronunciation and spaced-repetition review API")


def create_storage() -> Storage:
    """Pick the storage backend from ARVO_STORAGE ('file' or 'postgres')."""
    storage_type = os.environ.get('ARVO_STORAGE', DEFAULT_STORAGE)
    if storage_type == 'postgres':
        # psycopg2 is only needed for this backend
        from server.postgres_storage import PostgresStorage
        logger.info("Using PostgreSQL storage")
        return PostgresStorage()
    logger.info("Using file storage")
    return FileStorage()


def load_review_intervals(store: Storage) -> dict[int, int] | None:
    """Read an interval table override from the config file, if there is one."""
    try:
        config = store.load_config()
    except FileNotFoundError:
        return None
    overrides = config.get('review_intervals_days')
    if not overrides:
        return None
    intervals = validate_intervals(overrides)
    logger.info(f"Using review intervals from config: {intervals}")
    return intervals


@app.on_event("startup")
async def startup():
    """Initialize storage and review configuration on startup."""
    global storage, review_intervals
    if storage is None:
        storage = create_storage()
    review_intervals = load_review_intervals(storage)


def get_progress(user_id: str = "default") -> dict[str, CardProgress]:
    """Load a learner's progress records as CardProgress values."""
    raw = storage.load_progress(user_id)
    return {card_id: CardProgress.from_dict(record) for card_id, record in raw.items()}


def get_session_stats(user_id: str) -> SessionStats:
    """Counters for a learner's sitting, evicting the least recently used past the cap."""
    if user_id in session_stats:
        session_stats.move_to_end(user_id)
        return session_stats[user_id]
    session_stats[user_id] = SessionStats()
    while len(session_stats) > MAX_TRACKED_SESSIONS:
        evicted, _ = session_stats.popitem(last=False)
        logger.info(f"Dropped session counters for {evicted}")
    return session_stats[user_id]


def require_card(card_id: str) -> VocabularyCard:
    card = get_card(card_id)
    if card is None:
        raise HTTPException(status_code=404, detail=f"Unknown card: {card_id}")
    return card


def progress_response(progress: CardProgress) -> ProgressResponse:
    return ProgressResponse(level_label=LEVEL_LABELS[progress.level], **progress.to_dict())


@app.get("/")
async def root():
    """Health check."""
    return {"name": "arvo", "status": "ok", "cards": len(CATALOG)}


@app.get("/api/users")
async def list_users():
    """List learners with stored progress."""
    return {"users": storage.list_users()}


@app.get("/api/cards")
async def list_cards(category: Optional[str] = None, difficulty: Optional[str] = None):
    """Browse the catalog, optionally filtered by category and difficulty."""
    try:
        cards = filter_cards(CATALOG, category, difficulty)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"total": len(cards), "cards": [card.to_dict() for card in cards]}


@app.get("/api/cards/due")
async def due_cards(user_id: str = Query("default", pattern=USER_ID_PATTERN)):
    """Cards due for review now: unseen first, then lowest level first."""
    progress = get_progress(user_id)
    cards = get_due_cards(CATALOG, progress, utc_now())
    items = []
    for card in cards:
        level = get_card_progress(progress, card.id).level
        items.append({**card.to_dict(), 'level': level, 'level_label': LEVEL_LABELS[level]})
    return {"total": len(items), "cards": items}


@app.get("/api/cards/{card_id}/progress", response_model=ProgressResponse)
async def card_progress(card_id: str, user_id: str = Query("default", pattern=USER_ID_PATTERN)):
    """Progress for one card (an unseen record if never reviewed)."""
    require_card(card_id)
    return progress_response(get_card_progress(get_progress(user_id), card_id))


@app.post("/api/cards/{card_id}/review", response_model=ReviewResponse)
async def review_card(card_id: str, request: ReviewRequest):
    """Record a 1-5 recall rating for a card and schedule its next review."""
    require_card(card_id)
    current = get_card_progress(get_progress(request.user_id), card_id)

    try:
        updated = record_review(current, request.rating, utc_now(), review_intervals)
    except InvalidRating as e:
        logger.warning(f"Rejected rating for {request.user_id}/{card_id}: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    storage.save_card_progress(request.user_id, updated.to_dict())
    stats = get_session_stats(request.user_id)
    stats.record(request.rating)
    logger.info(f"Review {request.user_id}/{card_id}: rating {request.rating}, "
                f"level {current.level} -> {updated.level}")

    return ReviewResponse(
        progress=progress_response(updated),
        previous_level=current.level,
        session=stats.to_dict()
    )


@app.post("/api/pronunciation", response_model=PronunciationResponse)
async def pronunciation(request: PronunciationRequest):
    """Score recognizer output against a target phrase."""
    result = evaluate_pronunciation(request.target, request.spoken, request.alternatives)
    return PronunciationResponse(passed=result.tier.passed, **result.to_dict())


@app.get("/api/status", response_model=StatusResponse)
async def get_status(user_id: str = Query("default", pattern=USER_ID_PATTERN)):
    """Get learner progress summary."""
    progress = get_progress(user_id)
    return StatusResponse(
        user_id=user_id,
        total_cards=len(CATALOG),
        learned_count=learned_count(progress),
        mastered_count=mastered_count(progress),
        due_count=len(get_due_cards(CATALOG, progress, utc_now())),
        category_stats=category_stats(CATALOG, progress),
        session=(session_stats.get(user_id) or SessionStats()).to_dict()
    )


@app.delete("/api/progress")
async def reset_progress(user_id: str = Query("default", pattern=USER_ID_PATTERN)):
    """Wipe a learner's progress and session counters."""
    removed = storage.reset_progress(user_id)
    session_stats.pop(user_id, None)
    logger.info(f"Reset progress for {user_id}: {removed} records removed")
    return {"removed": removed}


def create_app():
    """Factory function for creating the app (useful for testing)."""
    return app
