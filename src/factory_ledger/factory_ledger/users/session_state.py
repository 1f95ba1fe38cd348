from __future__ import annotations

from typing import Optional, Protocol

from flask import session

SESSION_KEY = "uid"


class SessionState(Protocol):
    """Holder of the active credential (the signed-in uid)."""

    def get_user_id(self) -> Optional[str]:
        raise NotImplementedError

    def set_user_id(self, user_id: str) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError


class FlaskSessionState(SessionState):
    """Keeps the uid in the signed Flask session cookie of the current request."""

    def get_user_id(self) -> Optional[str]:
        return session.get(SESSION_KEY)

    def set_user_id(self, user_id: str) -> None:
        session[SESSION_KEY] = user_id

    def clear(self) -> None:
        session.clear()
