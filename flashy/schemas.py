from typing import Annotated, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

CardType = Literal["multiple-choice", "fill-in-the-blank", "qa"]


class Styling(BaseModel):
    bg: Optional[str] = None
    color: Optional[str] = None


# ---------- cards ----------
class Choice(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    is_correct: bool = False


class MultipleChoiceCard(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["multiple-choice"] = "multiple-choice"
    question: str
    choices: List[Choice]
    bg: Optional[str] = None
    color: Optional[str] = None


class FillInBlankCard(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["fill-in-the-blank"] = "fill-in-the-blank"
    question_prefix: str
    question_suffix: Optional[str] = None
    answer: str
    bg: Optional[str] = None
    color: Optional[str] = None


class QACard(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["qa"] = "qa"
    question: str
    answer: str
    bg: Optional[str] = None
    color: Optional[str] = None


Card = Annotated[
    Union[MultipleChoiceCard, FillInBlankCard, QACard],
    Field(discriminator="type"),
]


class Deck(BaseModel):
    model_config = ConfigDict(frozen=True)

    cards: tuple[Card, ...] = ()

    def __len__(self) -> int:
        return len(self.cards)

    def __getitem__(self, i: int):
        return self.cards[i]

    @property
    def is_empty(self) -> bool:
        return not self.cards


# ---------- review settings ----------
class KeyBindings(BaseModel):
    previous: List[str] = Field(default_factory=lambda: ["ArrowLeft"])
    next: List[str] = Field(default_factory=lambda: ["ArrowRight"])
    reset: List[str] = Field(default_factory=lambda: ["r", "R"])


class ReviewSettings(BaseModel):
    shuffle_cards: bool = False
    shuffle_answers: bool = True
    auto_advance_on_correct: bool = False
    auto_advance_on_incorrect: bool = False
    auto_advance_delay_ms: int = Field(1000, ge=0)
    completion_delay_ms: int = Field(1000, ge=0)
    default_card_type: CardType = "multiple-choice"
    key_bindings: KeyBindings = Field(default_factory=KeyBindings)


# ---------- session snapshots ----------
class Stats(BaseModel):
    model_config = ConfigDict(frozen=True)

    correct: int = 0
    incorrect: int = 0
    answered: int = 0


class ReviewSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    complete: Literal[False] = False
    position: int
    total_cards: int
    card: Card
    choices: List[Choice] = Field(default_factory=list)  # display order, multiple-choice only
    revealed: List[int] = Field(default_factory=list)  # correct choices shown
    selected: List[int] = Field(default_factory=list)
    is_answered: bool = False
    outcome: Optional[bool] = None
    stats: Stats


class CompleteSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    complete: Literal[True] = True
    total_cards: int
    stats: Stats
    score_percent: int


Snapshot = Union[ReviewSnapshot, CompleteSnapshot]


# ---------- API payloads ----------
class SourceIn(BaseModel):
    source: str = ""


class ExportIn(SourceIn):
    title: str = "Flashy"


class DeckOut(BaseModel):
    cards: List[Card]
    total: int


class CardDraft(BaseModel):
    card_type: Optional[CardType] = None
    question: str = ""
    correct_answers: str = ""
    incorrect_answers: str = ""
    fitb_text: str = ""
    qa_answer: str = ""
    bg_color: str = ""
    text_color: str = ""


class ComposeIn(BaseModel):
    drafts: List[CardDraft]
    default_card_type: Optional[CardType] = None


class SessionSettingsIn(BaseModel):
    shuffle_cards: Optional[bool] = None
    shuffle_answers: Optional[bool] = None
    auto_advance_on_correct: Optional[bool] = None
    auto_advance_on_incorrect: Optional[bool] = None
    auto_advance_delay_ms: Optional[int] = Field(None, ge=0)
    completion_delay_ms: Optional[int] = Field(None, ge=0)
    key_bindings: Optional[KeyBindings] = None


class SessionIn(SourceIn):
    settings: Optional[SessionSettingsIn] = None


class SessionOut(BaseModel):
    id: str
    snapshot: Snapshot


class GotoIn(BaseModel):
    index: int


class GradeIn(BaseModel):
    is_correct: bool


class ChoiceIn(BaseModel):
    index: int


class AnswerIn(BaseModel):
    text: str = ""


class KeyIn(BaseModel):
    key: str
    typing: bool = False
