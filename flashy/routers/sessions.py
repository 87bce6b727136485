from fastapi import APIRouter, HTTPException
from loguru import logger

from ..errors import SessionNotFound
from ..schemas import AnswerIn, ChoiceIn, GotoIn, GradeIn, KeyIn, SessionIn, SessionOut
from ..services.keys import handle_key
from ..services.scheduler import AsyncioScheduler
from ..services.session import SessionController
from ..services.store import SessionStore
from ..settings import settings
from .deck import deck_or_422

router = APIRouter()

store = SessionStore(max_size=settings.MAX_SESSIONS)
scheduler = AsyncioScheduler()


def _controller(session_id: str) -> SessionController:
    try:
        return store.get(session_id)
    except SessionNotFound as e:
        raise HTTPException(404, str(e))


def _out(session_id: str, controller: SessionController) -> dict:
    return {"id": session_id, "snapshot": controller.snapshot()}


@router.post("/sessions", response_model=SessionOut)
async def create_session(body: SessionIn):
    deck = deck_or_422(body.source)
    controller = SessionController(
        deck, settings.review_settings(body.settings), scheduler=scheduler,
    )
    sid = store.add(controller)
    logger.info(f"[session] created {sid} with {len(deck)} card(s)")
    return _out(sid, controller)


@router.get("/sessions/{session_id}", response_model=SessionOut)
async def get_session(session_id: str):
    return _out(session_id, _controller(session_id))


@router.post("/sessions/{session_id}/goto", response_model=SessionOut)
async def goto(session_id: str, body: GotoIn):
    c = _controller(session_id)
    c.go_to(body.index)
    return _out(session_id, c)


@router.post("/sessions/{session_id}/grade", response_model=SessionOut)
async def grade(session_id: str, body: GradeIn):
    c = _controller(session_id)
    c.grade(c.position, body.is_correct)
    return _out(session_id, c)


@router.post("/sessions/{session_id}/choice", response_model=SessionOut)
async def choice(session_id: str, body: ChoiceIn):
    c = _controller(session_id)
    c.select_choice(body.index)
    return _out(session_id, c)


@router.post("/sessions/{session_id}/answer", response_model=SessionOut)
async def answer(session_id: str, body: AnswerIn):
    c = _controller(session_id)
    c.submit_answer(body.text)
    return _out(session_id, c)


@router.post("/sessions/{session_id}/self-grade", response_model=SessionOut)
async def self_grade(session_id: str, body: GradeIn):
    c = _controller(session_id)
    c.self_grade(body.is_correct)
    return _out(session_id, c)


@router.post("/sessions/{session_id}/key", response_model=SessionOut)
async def key(session_id: str, body: KeyIn):
    c = _controller(session_id)
    handle_key(c, body.key, typing=body.typing)
    return _out(session_id, c)


@router.post("/sessions/{session_id}/reset", response_model=SessionOut)
async def reset(session_id: str):
    c = _controller(session_id)
    c.reset()
    return _out(session_id, c)


@router.delete("/sessions/{session_id}")
async def delete_session(session_id: str):
    try:
        store.remove(session_id)
    except SessionNotFound as e:
        raise HTTPException(404, str(e))
    return {"deleted": True, "id": session_id}
