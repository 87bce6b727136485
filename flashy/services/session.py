import math
import random
from typing import Callable, Optional

from loguru import logger

from ..errors import EmptyDeckError
from ..schemas import (
    CompleteSnapshot, Deck, FillInBlankCard, MultipleChoiceCard, QACard,
    ReviewSettings, ReviewSnapshot, Stats,
)
from .cards import text_matches
from .scheduler import Handle, ManualScheduler, Scheduler
from .shuffle import reshuffled_order, shuffled


def score_percent(correct: int, total: int) -> int:
    """Percentage of `total`, rounded half up."""
    if total <= 0:
        return 0
    return math.floor(correct / total * 100 + 0.5)


class SessionController:
    """
    Review state machine over one deck: Reviewing(position) -> Complete.

    Every state change is pushed to `on_render` as an immutable snapshot.
    Delayed transitions (auto-advance, completion) go through `scheduler`.
    """

    def __init__(
        self,
        deck: Deck,
        settings: Optional[ReviewSettings] = None,
        *,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
        on_render: Optional[Callable] = None,
    ):
        if deck.is_empty:
            raise EmptyDeckError()
        self.deck = deck
        self.settings = settings or ReviewSettings()
        self.scheduler = scheduler or ManualScheduler()
        self.rng = rng or random.Random()
        self.on_render = on_render
        self._pending: list[Handle] = []

        self.order = list(range(len(deck)))
        if self.settings.shuffle_cards:
            self.order = shuffled(self.order, self.rng)
        self._start()

    # ---------- state ----------
    def _start(self) -> None:
        self.position = 0
        self.answered: set[int] = set()
        self.outcomes: dict[int, bool] = {}
        self.revealed: dict[int, set[int]] = {}
        self.selected: dict[int, list[int]] = {}
        self.stats = Stats()
        self.complete = False
        self.choice_orders = {}
        for pos, idx in enumerate(self.order):
            card = self.deck[idx]
            if isinstance(card, MultipleChoiceCard):
                choices = card.choices
                if self.settings.shuffle_answers:
                    choices = shuffled(choices, self.rng)
                self.choice_orders[pos] = list(choices)
        self._emit()

    @property
    def total(self) -> int:
        return len(self.order)

    @property
    def current_card(self):
        return self.deck[self.order[self.position]]

    @property
    def score_percent(self) -> int:
        return score_percent(self.stats.correct, self.total)

    def snapshot(self):
        if self.complete:
            return CompleteSnapshot(
                total_cards=self.total, stats=self.stats, score_percent=self.score_percent,
            )
        pos = self.position
        return ReviewSnapshot(
            position=pos,
            total_cards=self.total,
            card=self.current_card,
            choices=self.choice_orders.get(pos, []),
            revealed=sorted(self.revealed.get(pos, ())),
            selected=list(self.selected.get(pos, ())),
            is_answered=pos in self.answered,
            outcome=self.outcomes.get(pos),
            stats=self.stats,
        )

    def _emit(self) -> None:
        if self.on_render is not None:
            self.on_render(self.snapshot())

    def _schedule(self, delay_ms: int, transition: Callable[[], None]) -> None:
        self._pending = [h for h in self._pending if not h.cancelled]
        self._pending.append(self.scheduler.schedule(delay_ms, transition))

    # ---------- transitions ----------
    def go_to(self, index: int) -> None:
        if self.complete or not (0 <= index < self.total):
            return
        self.position = index
        self._emit()

    def grade(self, position: int, is_correct: bool) -> None:
        if self.complete or not (0 <= position < self.total) or position in self.answered:
            return
        self.answered.add(position)
        self.outcomes[position] = is_correct
        self.stats = Stats(
            correct=self.stats.correct + (1 if is_correct else 0),
            incorrect=self.stats.incorrect + (0 if is_correct else 1),
            answered=self.stats.answered + 1,
        )
        logger.debug(f"[session] graded position={position} correct={is_correct} answered={self.stats.answered}/{self.total}")
        self._emit()

        advance = (self.settings.auto_advance_on_correct if is_correct
                   else self.settings.auto_advance_on_incorrect)
        nxt = position + 1
        if advance and nxt < self.total:
            self._schedule(self.settings.auto_advance_delay_ms, lambda: self.go_to(nxt))
        if self.stats.answered == self.total:
            self._schedule(self.settings.completion_delay_ms, self._finish)

    def _finish(self) -> None:
        if self.complete:
            return
        self.complete = True
        logger.debug(f"[session] complete score={self.score_percent}%")
        self._emit()

    def cancel_pending(self) -> None:
        for handle in self._pending:
            handle.cancel()
        self._pending = []

    def reset(self) -> None:
        self.cancel_pending()
        if self.settings.shuffle_cards:
            self.order = reshuffled_order(self.order, self.order[0], self.rng)
        self._start()

    # ---------- answering the current card ----------
    def select_choice(self, index: int) -> None:
        """Click the `index`-th displayed choice of a multiple-choice card."""
        if self.complete:
            return
        pos = self.position
        card = self.current_card
        if not isinstance(card, MultipleChoiceCard) or pos in self.answered:
            return
        choices = self.choice_orders[pos]
        if not (0 <= index < len(choices)) or index in self.selected.get(pos, ()):
            return
        self.selected.setdefault(pos, []).append(index)
        revealed = self.revealed.setdefault(pos, set())
        correct = {i for i, c in enumerate(choices) if c.is_correct}

        if choices[index].is_correct:
            revealed.add(index)
            if revealed == correct:
                self.grade(pos, True)
            else:
                self._emit()
        else:
            revealed.update(correct)
            self.grade(pos, False)

    def submit_answer(self, text: str) -> None:
        card = self.current_card
        if self.complete or not isinstance(card, FillInBlankCard):
            return
        self.grade(self.position, text_matches(card, text))

    def self_grade(self, is_correct: bool) -> None:
        if self.complete or not isinstance(self.current_card, QACard):
            return
        self.grade(self.position, is_correct)
