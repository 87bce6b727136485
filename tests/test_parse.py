import pytest

from flashy.errors import EmptyDeckError
from flashy.schemas import Choice, FillInBlankCard, MultipleChoiceCard, QACard
from flashy.services.deck import load_deck, parse_deck
from flashy.services.parse import block_lines, resolve_card, split_blocks


class TestSplitBlocks:
    def test_splits_on_delimiter_line(self):
        assert split_blocks("a\n---\nb\n---\nc") == ["a", "b", "c"]

    def test_delimiter_inside_line_is_not_a_split(self):
        assert split_blocks("a --- b\nc") == ["a --- b\nc"]

    def test_blank_lines_dropped(self):
        assert block_lines("\n  Q  \n\n=A\n   \n") == ["Q  ", "=A"]


class TestResolver:
    def test_multiple_choice(self):
        card = resolve_card(["What is 10+20?", "=30", "20", "10", "50"])
        assert isinstance(card, MultipleChoiceCard)
        assert card.question == "What is 10+20?"
        assert card.choices == [
            Choice(text="30", is_correct=True),
            Choice(text="20", is_correct=False),
            Choice(text="10", is_correct=False),
            Choice(text="50", is_correct=False),
        ]

    def test_multiple_choice_needs_a_correct_answer(self):
        assert resolve_card(["Q", "a", "b"]) is None

    def test_single_line_without_blank_is_rejected(self):
        assert resolve_card(["Just a line"]) is None

    def test_fill_in_blank(self):
        card = resolve_card(["Humans have {{206}} bones in their body"])
        assert card == FillInBlankCard(
            question_prefix="Humans have",
            question_suffix="bones in their body",
            answer="206",
        )

    def test_fill_in_blank_without_suffix(self):
        card = resolve_card(["The answer is {{42}}"])
        assert card.question_suffix is None
        assert card.answer == "42"

    def test_fill_in_blank_first_open_last_close(self):
        card = resolve_card(["a {{b}} c {{d}} e"])
        assert card.question_prefix == "a"
        assert card.answer == "b}} c {{d"
        assert card.question_suffix == "e"

    def test_empty_blank_falls_through_to_multiple_choice(self):
        card = resolve_card(["Pick {{ }}", "=x", "y"])
        assert isinstance(card, MultipleChoiceCard)

    def test_blank_only_checked_on_first_line(self):
        assert resolve_card(["Question", "{{x}}"]) is None

    def test_qa(self):
        card = resolve_card(["This plugin is", "===Awesome"])
        assert card == QACard(question="This plugin is", answer="Awesome")

    def test_qa_multiline_question(self):
        card = resolve_card(["Line one", "Line two", "  === Answer  ", "ignored"])
        assert card.question == "Line one\nLine two"
        assert card.answer == "Answer"

    def test_qa_takes_precedence_over_blank(self):
        card = resolve_card(["Fill {{x}}", "===y"])
        assert isinstance(card, QACard)

    def test_qa_marker_commits_even_when_invalid(self):
        # would be a valid fill-in card without the === line
        assert resolve_card(["Fill {{x}}", "==="]) is None
        assert resolve_card(["===answer"]) is None

    def test_empty(self):
        assert resolve_card([]) is None


class TestDeck:
    def test_block_styling_inherited(self):
        deck = parse_deck("[[bg=#2c3e50]]\nQ1\n=A\nB\n---\nQ2\n=C\nD")
        assert len(deck) == 2
        assert all(c.bg == "#2c3e50" for c in deck.cards)
        assert all(c.color is None for c in deck.cards)

    def test_card_styling_overrides_block(self):
        deck = parse_deck("[[bg=#111 color=white]]\n[bg=#222]\nQ1\n=A\nB\n---\nQ2\n===C")
        first, second = deck.cards
        assert (first.bg, first.color) == ("#222", "white")
        assert (second.bg, second.color) == ("#111", "white")

    def test_props_only_block_is_dropped(self):
        deck = parse_deck("[bg=red]\n---\nQ\n===A")
        assert len(deck) == 1

    def test_unparseable_blocks_dropped_silently(self):
        deck = parse_deck("garbage\n---\nQ\n=A\nB\n---\nmore garbage\nno answer")
        assert len(deck) == 1
        assert deck[0].question == "Q"

    def test_blank_source_is_empty(self):
        assert parse_deck("\n\n").is_empty
        with pytest.raises(EmptyDeckError):
            load_deck("\n\n")

    @pytest.mark.parametrize("junk", ["", "---", "[[", "{{}}", "===", "\n---\n---\n", "[]", "[[]]\n[]"])
    def test_never_raises(self, junk):
        assert parse_deck(junk).is_empty

    def test_deterministic(self):
        src = "[[color=red]]\nQ\n=A\nB\n---\nX {{Y}} Z\n---\nQ\n===A"
        assert parse_deck(src) == parse_deck(src)
