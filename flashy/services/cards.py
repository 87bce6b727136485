from ..schemas import FillInBlankCard, MultipleChoiceCard, QACard

BLANK = "___"


def _unknown(card):
    return TypeError(f"unknown card type: {type(card).__name__}")


def question_text(card) -> str:
    """Header text shown above a card."""
    if isinstance(card, MultipleChoiceCard):
        return card.question
    if isinstance(card, FillInBlankCard):
        if card.question_suffix:
            return f"{card.question_prefix} {BLANK} {card.question_suffix}"
        return card.question_prefix
    if isinstance(card, QACard):
        return card.question
    raise _unknown(card)


def answer_text(card) -> str:
    if isinstance(card, MultipleChoiceCard):
        return "\n".join(c.text for c in card.choices if c.is_correct)
    if isinstance(card, (FillInBlankCard, QACard)):
        return card.answer
    raise _unknown(card)


def text_matches(card: FillInBlankCard, given: str) -> bool:
    return (given or "").strip().lower() == card.answer.lower()
