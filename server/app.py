"""FastAPI application -- routes for the review scheduler."""

import logging
from contextlib import asynccontextmanager
from datetime import date, datetime
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware

from server import __version__
from server.config import Settings
from server.dependencies import get_scheduler_config, get_settings, get_store
from server.schemas import (
    CardReviewRequest,
    CardStateResponse,
    DueCardsResponse,
    HealthResponse,
    NextStateRequest,
    PreviewRequest,
    PreviewResponse,
    ReviewStateSchema,
)
from server.services import schedule_service
from srs.constants import ALGORITHM_VERSION, SchedulerConfig
from srs.storage import ReviewStateStore

logger = logging.getLogger("pluckk")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan: configure logging. The store is loaded lazily on first request."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Startup: %s, store=%s", ALGORITHM_VERSION, settings.store_path)
    yield
    logger.info("Shutdown: complete")


app = FastAPI(title="Pluckk Scheduler", version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=Settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


# ---- Stateless engine ----

@app.get("/schedule/initial", response_model=ReviewStateSchema)
def schedule_initial(
    now: Optional[datetime] = None,
    config: SchedulerConfig = Depends(get_scheduler_config),
):
    return schedule_service.initial_state(now, config)


@app.post("/schedule/next", response_model=ReviewStateSchema)
def schedule_next(
    body: NextStateRequest,
    config: SchedulerConfig = Depends(get_scheduler_config),
):
    """Apply one rating (0-5) to a caller-held state."""
    try:
        return schedule_service.next_state(
            body.state.model_dump(), body.rating, body.reviewed_at, config,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.post("/schedule/preview", response_model=PreviewResponse)
def schedule_preview(
    body: PreviewRequest,
    config: SchedulerConfig = Depends(get_scheduler_config),
):
    """Projected state and due date for every rating."""
    try:
        return schedule_service.preview(body.state.model_dump(), body.now, config)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


# ---- Stored cards ----

@app.get("/cards/due", response_model=DueCardsResponse)
def cards_due(
    as_of: Optional[date] = None,
    store: ReviewStateStore = Depends(get_store),
):
    return schedule_service.get_due_cards(store, as_of)


@app.post("/cards/{card_id}", response_model=CardStateResponse)
def card_add(card_id: str, store: ReviewStateStore = Depends(get_store)):
    return schedule_service.add_card(store, card_id)


@app.get("/cards/{card_id}", response_model=CardStateResponse)
def card_get(card_id: str, store: ReviewStateStore = Depends(get_store)):
    try:
        return schedule_service.get_card(store, card_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Card not found: {card_id}")


@app.get("/cards/{card_id}/preview", response_model=PreviewResponse)
def card_preview(
    card_id: str,
    now: Optional[datetime] = None,
    store: ReviewStateStore = Depends(get_store),
):
    try:
        return schedule_service.preview_card(store, card_id, now)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Card not found: {card_id}")


@app.post("/cards/{card_id}/review", response_model=CardStateResponse)
def card_review(
    card_id: str,
    body: CardReviewRequest,
    store: ReviewStateStore = Depends(get_store),
):
    """Submit a rating (0-5) for a stored card. Updates SM-2 scheduling."""
    try:
        return schedule_service.review_card(store, card_id, body.rating, body.reviewed_at)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Card not found: {card_id}")
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.delete("/cards/{card_id}", status_code=204)
def card_remove(card_id: str, store: ReviewStateStore = Depends(get_store)):
    try:
        schedule_service.remove_card(store, card_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Card not found: {card_id}")
    return Response(status_code=204)
