from flashy.schemas import CardDraft, FillInBlankCard, MultipleChoiceCard, QACard
from flashy.services.compose import build_deck_string, deck_to_markup
from flashy.services.deck import parse_deck


def test_form_drafts_round_trip():
    drafts = [
        CardDraft(card_type="multiple-choice", question="Which layer routes packets?",
                  correct_answers="Layer 3\n", incorrect_answers="Layer 2\nLayer 7",
                  bg_color="#2c3e50"),
        CardDraft(card_type="fill-in-the-blank", fitb_text="The OSI model has {{seven}} layers.",
                  text_color="white"),
        CardDraft(card_type="qa", question="What does the A in CIA stand for?", qa_answer="Availability"),
    ]
    deck = parse_deck(build_deck_string(drafts))

    mc, fib, qa = deck.cards
    assert isinstance(mc, MultipleChoiceCard)
    assert mc.question == "Which layer routes packets?"
    assert [(c.text, c.is_correct) for c in mc.choices] == [
        ("Layer 3", True), ("Layer 2", False), ("Layer 7", False),
    ]
    assert mc.bg == "#2c3e50"
    assert fib == FillInBlankCard(question_prefix="The OSI model has", question_suffix="layers.",
                                  answer="seven", color="white")
    assert qa == QACard(question="What does the A in CIA stand for?", answer="Availability")


def test_empty_drafts_skipped():
    drafts = [CardDraft(), CardDraft(card_type="qa", question="Q", qa_answer="A")]
    assert build_deck_string(drafts) == "Q\n===A"


def test_default_card_type():
    drafts = [CardDraft(question="Q", qa_answer="A")]
    assert build_deck_string(drafts, default_type="qa") == "Q\n===A"


def test_parsed_deck_round_trip():
    src = "[[bg=#111]]\nQ1\n=A\nB\n---\n[color=red]\nHumans have {{206}} bones\n---\nTwo\nlines\n===Answer"
    deck = parse_deck(src)
    assert parse_deck(deck_to_markup(deck.cards)) == deck


def test_correct_choice_starting_with_marker_stays_multiple_choice():
    deck = parse_deck("Q\n= ==x\nB")
    assert deck[0].choices[0].text == "==x"
    assert "===" not in deck_to_markup(deck.cards)
    assert parse_deck(deck_to_markup(deck.cards)) == deck


def test_bracketed_question_round_trips():
    deck = parse_deck("[bg=]\n[Q]\n===A\n---\n[[Q2]] more\n===B")
    assert [c.question for c in deck.cards] == ["[Q]", "[[Q2]] more"]
    assert parse_deck(deck_to_markup(deck.cards)) == deck


def test_bracketed_draft_question_kept():
    markup = build_deck_string([CardDraft(card_type="qa", question="[Q]", qa_answer="A")])
    assert markup == "[]\n[Q]\n===A"
    assert parse_deck(markup).cards == (QACard(question="[Q]", answer="A"),)


def test_draft_correct_answer_starting_with_marker():
    drafts = [CardDraft(card_type="multiple-choice", question="Q",
                        correct_answers="==x", incorrect_answers="y")]
    card = parse_deck(build_deck_string(drafts))[0]
    assert isinstance(card, MultipleChoiceCard)
    assert [(c.text, c.is_correct) for c in card.choices] == [("==x", True), ("y", False)]
