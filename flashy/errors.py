class FlashyError(Exception):
    """Base class for domain errors surfaced to callers."""


class EmptyDeckError(FlashyError):
    message = "No valid flashy cards found. Check your syntax!"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class SessionNotFound(FlashyError):
    def __init__(self, session_id: str):
        super().__init__(f"Unknown session: {session_id}")
        self.session_id = session_id
