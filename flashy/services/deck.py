from loguru import logger

from ..errors import EmptyDeckError
from ..schemas import Deck, Styling
from .parse import block_lines, resolve_card, split_blocks
from .props import take_block_props, take_card_props


def _styled(card, card_props: Styling, block_props: Styling):
    return card.model_copy(update={
        "bg": card_props.bg or block_props.bg,
        "color": card_props.color or block_props.color,
    })


def parse_deck(source: str) -> Deck:
    """
    Parse flashy markup into a Deck. Total over any input: blocks that match
    no grammar are dropped and an empty Deck is a valid result.
    """
    content = (source or "").strip()
    block_props, content = take_block_props(content)

    cards, dropped = [], 0
    for block in split_blocks(content):
        lines = block_lines(block)
        if not lines:
            continue
        card_props, lines = take_card_props(lines)
        card = resolve_card(lines)
        if card is None:
            dropped += 1
            continue
        cards.append(_styled(card, card_props, block_props))

    if dropped:
        logger.debug(f"[parse] dropped {dropped} unparseable block(s)")
    return Deck(cards=tuple(cards))


def load_deck(source: str) -> Deck:
    """Like parse_deck, but an empty result raises EmptyDeckError."""
    deck = parse_deck(source)
    if deck.is_empty:
        raise EmptyDeckError()
    return deck
