from typing import Iterable, Optional

from ..schemas import CardDraft, CardType, FillInBlankCard, MultipleChoiceCard, QACard
from .parse import CORRECT_MARKER, DELIMITER, QA_MARKER

BLOCK_SEPARATOR = f"\n{DELIMITER}\n"


def props_line(bg: Optional[str], color: Optional[str]) -> str:
    props = []
    if bg:
        props.append(f"bg={bg}")
    if color:
        props.append(f"color={color}")
    return f"[{' '.join(props)}]\n" if props else ""


def _guard_first_line(props: str, body: str) -> str:
    """A body whose first line starts with `[` would be read as a props line; give it an empty one."""
    if not props and body.lstrip().startswith("["):
        props = "[]\n"
    return props + body


def _correct_line(text: str) -> str:
    # never starts with the QA marker
    return f"{CORRECT_MARKER} {text}"


def _answer_lines(text: str) -> list[str]:
    return [a.strip() for a in (text or "").strip().split("\n") if a.strip()]


def draft_to_markup(draft: CardDraft, default_type: CardType = "multiple-choice") -> str:
    props = props_line(draft.bg_color.strip(), draft.text_color.strip())
    card_type = draft.card_type or default_type
    if card_type == "multiple-choice":
        correct = [_correct_line(a) for a in _answer_lines(draft.correct_answers)]
        body = f"{draft.question}\n" + "\n".join(correct + _answer_lines(draft.incorrect_answers))
    elif card_type == "fill-in-the-blank":
        body = draft.fitb_text
    elif card_type == "qa":
        body = f"{draft.question}\n{QA_MARKER}{draft.qa_answer}"
    else:
        raise TypeError(f"unknown card type: {card_type}")
    return _guard_first_line(props, body)


def build_deck_string(drafts: Iterable[CardDraft], default_type: CardType = "multiple-choice") -> str:
    """Markup for the drafts collected by the card-creation form. Empty drafts are skipped."""
    kept = [d for d in drafts if d.question.strip() or d.fitb_text.strip()]
    return BLOCK_SEPARATOR.join(draft_to_markup(d, default_type) for d in kept)


def card_to_markup(card) -> str:
    props = props_line(card.bg, card.color)
    if isinstance(card, MultipleChoiceCard):
        lines = [card.question] + [
            _correct_line(c.text) if c.is_correct else c.text for c in card.choices
        ]
        body = "\n".join(lines)
    elif isinstance(card, FillInBlankCard):
        parts = [card.question_prefix, f"{{{{{card.answer}}}}}", card.question_suffix or ""]
        body = " ".join(p for p in parts if p)
    elif isinstance(card, QACard):
        body = f"{card.question}\n{QA_MARKER}{card.answer}"
    else:
        raise TypeError(f"unknown card type: {type(card).__name__}")
    return _guard_first_line(props, body)


def deck_to_markup(cards: Iterable) -> str:
    return BLOCK_SEPARATOR.join(card_to_markup(c) for c in cards)
