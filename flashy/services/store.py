import uuid
from collections import OrderedDict
from typing import Optional

from loguru import logger

from ..errors import SessionNotFound
from .session import SessionController


class SessionStore:
    """In-memory sessions keyed by a random id; the oldest is evicted past `max_size`."""

    def __init__(self, max_size: int = 1000):
        self.max_size = max_size
        self._items: "OrderedDict[str, SessionController]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._items)

    def add(self, controller: SessionController, session_id: Optional[str] = None) -> str:
        sid = session_id or uuid.uuid4().hex
        self._items[sid] = controller
        while len(self._items) > self.max_size:
            old_id, old = self._items.popitem(last=False)
            old.cancel_pending()
            logger.info(f"[store] evicted session {old_id}")
        return sid

    def get(self, session_id: str) -> SessionController:
        try:
            return self._items[session_id]
        except KeyError:
            raise SessionNotFound(session_id)

    def remove(self, session_id: str) -> None:
        self.get(session_id).cancel_pending()
        del self._items[session_id]
