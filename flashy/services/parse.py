import re
from typing import Callable, Optional, Sequence

from ..schemas import Choice, FillInBlankCard, MultipleChoiceCard, QACard

DELIMITER = "---"
QA_MARKER = "==="
CORRECT_MARKER = "="

# first `{{` ... last `}}` on the line
_BLANK = re.compile(r"^(.*?)\{\{(.*)\}\}(.*)$")


# ---------- block splitting ----------
def split_blocks(content: str) -> list[str]:
    """Split on a line holding only the delimiter. No escaping."""
    return content.split(f"\n{DELIMITER}\n")


def block_lines(block: str) -> list[str]:
    return [line for line in block.strip().split("\n") if line.strip()]


# ---------- grammars ----------
class Reject(Exception):
    """A grammar claimed the block but its fields are invalid."""


def parse_qa(lines: Sequence[str]) -> Optional[QACard]:
    """A `===` line commits the block to QA, valid or not."""
    for i, line in enumerate(lines):
        if line.strip().startswith(QA_MARKER):
            question = "\n".join(lines[:i]).strip()
            answer = line.strip()[len(QA_MARKER):].strip()
            if question and answer:
                return QACard(question=question, answer=answer)
            raise Reject("qa")
    return None


def parse_fill_in(lines: Sequence[str]) -> Optional[FillInBlankCard]:
    m = _BLANK.match(lines[0])
    if not m:
        return None
    prefix, inner, suffix = m.groups()
    if not inner.strip():
        return None
    return FillInBlankCard(
        question_prefix=prefix.strip(),
        question_suffix=suffix.strip() or None,
        answer=inner.strip(),
    )


def parse_multiple_choice(lines: Sequence[str]) -> Optional[MultipleChoiceCard]:
    if len(lines) < 2:
        return None
    choices = []
    for line in lines[1:]:
        s = line.strip()
        if s.startswith(CORRECT_MARKER):
            choices.append(Choice(text=s[len(CORRECT_MARKER):].strip(), is_correct=True))
        else:
            choices.append(Choice(text=s, is_correct=False))
    if not any(c.is_correct for c in choices):
        return None
    return MultipleChoiceCard(question=lines[0].strip(), choices=choices)


GRAMMARS: tuple[Callable, ...] = (parse_qa, parse_fill_in, parse_multiple_choice)


def resolve_card(lines: Sequence[str]):
    """First grammar to produce a card wins. Never raises."""
    if not lines:
        return None
    try:
        for grammar in GRAMMARS:
            card = grammar(lines)
            if card is not None:
                return card
    except Reject:
        return None
    return None
