from fastapi import APIRouter, HTTPException
from loguru import logger

from ..errors import EmptyDeckError
from ..schemas import ComposeIn, Deck, DeckOut, SourceIn
from ..services.compose import build_deck_string
from ..services.deck import load_deck
from ..settings import settings

router = APIRouter()


def check_source_size(source: str) -> None:
    if len(source.encode("utf-8")) > settings.MAX_SOURCE_KB * 1024:
        raise HTTPException(413, f"Source too large. Max {settings.MAX_SOURCE_KB} KB.")


def deck_or_422(source: str) -> Deck:
    check_source_size(source)
    try:
        return load_deck(source)
    except EmptyDeckError as e:
        raise HTTPException(422, str(e))


@router.post("/deck/parse", response_model=DeckOut)
def parse(body: SourceIn):
    deck = deck_or_422(body.source)
    logger.info(f"[parse] {len(deck)} card(s)")
    return {"cards": list(deck.cards), "total": len(deck)}


@router.post("/deck/compose")
def compose(body: ComposeIn):
    review = settings.review_settings()
    default_type = body.default_card_type or review.default_card_type
    return {"source": build_deck_string(body.drafts, default_type)}
