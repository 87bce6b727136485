from fastapi import APIRouter
from fastapi.responses import StreamingResponse
from loguru import logger
from pathlib import Path
import io, csv, re, tempfile, os, hashlib
import genanki

from ..schemas import ExportIn, FillInBlankCard, MultipleChoiceCard, QACard
from ..services.cards import answer_text, question_text
from .deck import deck_or_422

router = APIRouter()

CARD_CSS = ".card { font-family: Inter, Arial; font-size: 18px; }"


def int_id_from_hash(h: str, salt: int = 0) -> int:
    return int(h[:10], 16) + salt

def _safe_name(title: str) -> str:
    return re.sub(r"[^A-Za-z0-9._-]+", "_", title)

def _choices_cell(card) -> str:
    if isinstance(card, MultipleChoiceCard):
        return " | ".join(("=" if c.is_correct else "") + c.text for c in card.choices)
    return ""

def _style_attr(card) -> str:
    style = []
    if card.bg: style.append(f"background-color:{card.bg}")
    if card.color: style.append(f"color:{card.color}")
    return ";".join(style)

@router.post("/export/csv")
def export_csv(body: ExportIn):
    deck = deck_or_422(body.source)

    sio = io.StringIO(newline="")
    writer = csv.writer(sio)
    writer.writerow(["type", "question", "answer", "choices", "bg", "color"])
    for c in deck.cards:
        writer.writerow([c.type, question_text(c), answer_text(c), _choices_cell(c), c.bg or "", c.color or ""])
    data = sio.getvalue().encode("utf-8-sig")
    filename = f"{_safe_name(body.title)}-cards.csv"
    headers = {"Content-Disposition": f'attachment; filename="{filename}"'}
    logger.info(f"[export] csv {len(deck)} card(s)")
    return StreamingResponse(io.BytesIO(data), media_type="text/csv", headers=headers)

@router.post("/export/apkg")
def export_apkg(body: ExportIn):
    deck = deck_or_422(body.source)
    digest = hashlib.sha256(body.source.encode("utf-8")).hexdigest()

    anki_deck = genanki.Deck(int_id_from_hash(digest, 1000), f"{body.title} – Flashy")

    basic_model = genanki.Model(
        int_id_from_hash(digest, 2000),
        "Flashy Basic",
        fields=[{"name":"Front"},{"name":"Back"},{"name":"Style"}],
        templates=[{
            "name":"Card 1",
            "qfmt":"<div style='{{Style}}'>{{Front}}</div>",
            "afmt":"<div style='{{Style}}'>{{Front}}<hr id=answer>{{Back}}</div>",
        }],
        css=CARD_CSS,
    )

    cloze_model = genanki.Model(
        int_id_from_hash(digest, 3000),
        "Flashy Cloze",
        fields=[{"name":"Text"},{"name":"Style"}],
        templates=[{
            "name":"Cloze",
            "qfmt":"<div style='{{Style}}'>{{cloze:Text}}</div>",
            "afmt":"<div style='{{Style}}'>{{cloze:Text}}</div>",
        }],
        css=CARD_CSS,
        model_type=genanki.Model.CLOZE,
    )

    for c in deck.cards:
        style = _style_attr(c)
        if isinstance(c, FillInBlankCard):
            text = " ".join(p for p in (c.question_prefix, f"{{{{c1::{c.answer}}}}}", c.question_suffix or "") if p)
            note = genanki.Note(model=cloze_model, fields=[text, style])
        elif isinstance(c, MultipleChoiceCard):
            front = c.question + "<br>" + "<br>".join(f"{i}. {ch.text}" for i, ch in enumerate(c.choices, 1))
            note = genanki.Note(model=basic_model, fields=[front, answer_text(c).replace("\n", "<br>"), style])
        elif isinstance(c, QACard):
            note = genanki.Note(model=basic_model, fields=[c.question.replace("\n", "<br>"), c.answer, style])
        else:
            raise TypeError(f"unknown card type: {type(c).__name__}")
        anki_deck.add_note(note)

    pkg = genanki.Package(anki_deck)

    with tempfile.NamedTemporaryFile(delete=False, suffix=".apkg") as tmp:
        tmp_path = tmp.name
    pkg.write_to_file(tmp_path)

    filename = f"{_safe_name(body.title)}-flashy.apkg"
    headers = {"Content-Disposition": f'attachment; filename="{filename}"'}
    try:
        data = Path(tmp_path).read_bytes()
    finally:
        os.remove(tmp_path)
    logger.info(f"[export] apkg {len(deck)} card(s)")
    return StreamingResponse(io.BytesIO(data), media_type="application/octet-stream", headers=headers)
