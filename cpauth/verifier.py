"""Verifier side of the Chaum-Pedersen authentication protocol.

A user moves through ``registered -> challenged -> authenticated``. Every new
challenge moves the user back to ``challenged``; registering again replaces
the record, last write wins. Challenges and sessions never expire, and an
auth id stays usable until the user requests another challenge.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .crypto import (
    DEFAULT_PARAMETERS,
    GroupParameters,
    decode,
    encode,
    random_identifier,
    random_scalar,
    verify_proof,
)
from .errors import InternalError, NotFoundError, UnauthenticatedError
from .store import SessionStore, UserRecord, UserState

logger = logging.getLogger(__name__)


@dataclass
class Challenge:
    auth_id: str
    c: int


class VerifierService:
    """Owns the session store for the lifetime of one running verifier."""

    def __init__(
        self,
        params: GroupParameters = DEFAULT_PARAMETERS,
        store: Optional[SessionStore] = None,
    ) -> None:
        self.params = params
        self.store = store if store is not None else SessionStore()

    def register(self, user_id: str, y1: int, y2: int) -> None:
        logger.info("Registering user %s", user_id)
        self.store.put_user(user_id, UserRecord(y1=y1, y2=y2))

    def create_challenge(self, user_id: str, r1: int, r2: int) -> Challenge:
        logger.info("Challenge requested for user %s", user_id)
        c = random_scalar(self.params.q)
        auth_id = random_identifier()

        def _store_attempt(record: UserRecord) -> None:
            record.r1 = r1
            record.r2 = r2
            record.c = c
            record.state = UserState.CHALLENGED

        try:
            issued = self.store.issue_challenge(auth_id, user_id, _store_attempt)
        except InternalError:
            logger.error("Generated auth id already in use for user %s", user_id)
            raise
        if issued is None:
            logger.warning("Challenge requested for unknown user %s", user_id)
            raise NotFoundError(f"User {user_id} not found")

        logger.info("Issued auth id %s to user %s", auth_id, user_id)
        return Challenge(auth_id=auth_id, c=c)

    def verify_authentication(self, auth_id: str, s: int) -> str:
        logger.info("Verifying auth id %s", auth_id)
        user_id, record = self.store.resolve(auth_id)
        if user_id is None:
            logger.warning("Unknown auth id %s", auth_id)
            raise NotFoundError(f"Auth {auth_id} not found")
        if record is None:
            logger.error("Auth id %s points at missing user %s", auth_id, user_id)
            raise NotFoundError(f"User {user_id} not found")

        ok = verify_proof(
            self.params.p,
            record.y1,
            record.y2,
            record.r1,
            record.r2,
            self.params.g,
            self.params.h,
            record.c,
            s,
        )
        if not ok:
            logger.warning("Challenge not solved correctly for auth id %s", auth_id)
            raise UnauthenticatedError("Challenge not solved correctly")

        session_id = random_identifier()
        if not self.store.attach_session(user_id, record, session_id):
            logger.warning("Attempt for auth id %s was superseded before completion", auth_id)
            raise UnauthenticatedError("Challenge was superseded by a newer attempt")

        logger.info("Authentication successful for user %s", user_id)
        return session_id

    def register_encoded(self, user_id: str, y1: bytes, y2: bytes) -> None:
        limit = self.params.byte_length
        self.register(user_id, decode(y1, limit), decode(y2, limit))

    def create_challenge_encoded(self, user_id: str, r1: bytes, r2: bytes) -> Tuple[str, bytes]:
        limit = self.params.byte_length
        challenge = self.create_challenge(user_id, decode(r1, limit), decode(r2, limit))
        return challenge.auth_id, encode(challenge.c)

    def verify_authentication_encoded(self, auth_id: str, s: bytes) -> str:
        return self.verify_authentication(auth_id, decode(s, self.params.byte_length))

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        return self.store.get_user(user_id)

    def user_state(self, user_id: str) -> UserState:
        return self.store.user_state(user_id)


__all__ = ["Challenge", "VerifierService"]
