"""Thread-safe in-memory session bookkeeping for the verifier.

Two maps are kept: user id to :class:`UserRecord` and auth id to user id.
Each map has its own lock. Any operation holding both acquires the auth-id
lock first and the user lock second.
"""

from __future__ import annotations

import dataclasses
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from .crypto import encode_hex
from .errors import InternalError


class UserState(str, Enum):
    UNREGISTERED = "unregistered"
    REGISTERED = "registered"
    CHALLENGED = "challenged"
    AUTHENTICATED = "authenticated"


@dataclass
class UserRecord:
    """Public protocol state stored for one user. The secret is never stored."""

    y1: int
    y2: int
    r1: int = 0
    r2: int = 0
    c: int = 0
    session_id: str = ""
    state: UserState = UserState.REGISTERED

    def same_attempt(self, other: "UserRecord") -> bool:
        """True when both records describe the same registration and challenge."""

        return (
            self.y1 == other.y1
            and self.y2 == other.y2
            and self.r1 == other.r1
            and self.r2 == other.r2
            and self.c == other.c
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "state": self.state.value,
            "y1": encode_hex(self.y1),
            "y2": encode_hex(self.y2),
            "r1": encode_hex(self.r1),
            "r2": encode_hex(self.r2),
            "c": encode_hex(self.c),
            "session_id": self.session_id,
        }


class SessionStore:
    """In-memory store shared by all request handlers of one verifier."""

    def __init__(self) -> None:
        self._users: Dict[str, UserRecord] = {}
        self._auth: Dict[str, str] = {}
        self._auth_lock = threading.Lock()
        self._users_lock = threading.Lock()

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        with self._users_lock:
            record = self._users.get(user_id)
            return dataclasses.replace(record) if record is not None else None

    def put_user(self, user_id: str, record: UserRecord) -> None:
        with self._users_lock:
            self._users[user_id] = dataclasses.replace(record)

    def update_user(self, user_id: str, mutate: Callable[[UserRecord], None]) -> Optional[UserRecord]:
        """Apply ``mutate`` to the stored record and return a copy of the result.

        ``mutate`` runs with the user lock held and must only assign fields.
        Returns ``None`` when the user is unknown.
        """

        with self._users_lock:
            record = self._users.get(user_id)
            if record is None:
                return None
            mutate(record)
            return dataclasses.replace(record)

    def attach_session(self, user_id: str, expected: UserRecord, session_id: str) -> bool:
        """Store ``session_id`` if the record still carries the ``expected`` attempt."""

        with self._users_lock:
            record = self._users.get(user_id)
            if record is None or not record.same_attempt(expected):
                return False
            record.session_id = session_id
            record.state = UserState.AUTHENTICATED
            return True

    def get_auth(self, auth_id: str) -> Optional[str]:
        with self._auth_lock:
            return self._auth.get(auth_id)

    def insert_auth(self, auth_id: str, user_id: str) -> None:
        with self._auth_lock:
            if auth_id in self._auth:
                raise InternalError("Auth id collision")
            self._auth[auth_id] = user_id

    def issue_challenge(
        self, auth_id: str, user_id: str, mutate: Callable[[UserRecord], None]
    ) -> Optional[UserRecord]:
        """Record a new attempt for ``user_id`` and index it under ``auth_id``.

        Both maps change together or not at all. Returns ``None`` when the
        user is unknown and raises :class:`InternalError` on an auth id
        collision.
        """

        with self._auth_lock:
            with self._users_lock:
                record = self._users.get(user_id)
                if record is None:
                    return None
                if auth_id in self._auth:
                    raise InternalError("Auth id collision")
                mutate(record)
                self._auth[auth_id] = user_id
                return dataclasses.replace(record)

    def resolve(self, auth_id: str) -> Tuple[Optional[str], Optional[UserRecord]]:
        """Look up the user behind ``auth_id`` and snapshot their record."""

        with self._auth_lock:
            user_id = self._auth.get(auth_id)
            if user_id is None:
                return None, None
            with self._users_lock:
                record = self._users.get(user_id)
                return user_id, dataclasses.replace(record) if record is not None else None

    def user_state(self, user_id: str) -> UserState:
        with self._users_lock:
            record = self._users.get(user_id)
            return record.state if record is not None else UserState.UNREGISTERED

    def count_users(self) -> int:
        with self._users_lock:
            return len(self._users)


__all__ = ["SessionStore", "UserRecord", "UserState"]
