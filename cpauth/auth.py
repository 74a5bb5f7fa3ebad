"""High level registration and authentication helpers.

These run the prover and verifier in the same process, which is what the
``demo`` command and the tests use.
"""

from __future__ import annotations

from typing import Dict

from .crypto import ChaumPedersenProver, encode_hex
from .errors import UnauthenticatedError
from .verifier import VerifierService


def register_user(service: VerifierService, user: str, secret: int) -> Dict[str, str]:
    prover = ChaumPedersenProver(secret, service.params)
    y1, y2 = prover.register()
    service.register(user, y1, y2)
    return {"user": user, "y1": encode_hex(y1), "y2": encode_hex(y2)}


def authenticate(service: VerifierService, user: str, secret: int) -> Dict[str, object]:
    """Run one challenge/response round and report the transcript.

    Protocol errors other than a failed proof propagate to the caller.
    """

    prover = ChaumPedersenProver(secret, service.params)
    commitment = prover.begin_challenge()
    challenge = service.create_challenge(user, commitment.r1, commitment.r2)
    response = prover.respond(commitment.blinding, challenge.c)

    transcript: Dict[str, object] = {
        "user": user,
        "auth_id": challenge.auth_id,
        "r1": encode_hex(commitment.r1),
        "r2": encode_hex(commitment.r2),
        "c": encode_hex(challenge.c),
        "s": encode_hex(response),
    }
    try:
        session_id = service.verify_authentication(challenge.auth_id, response)
    except UnauthenticatedError:
        transcript.update(success=False, session_id=None)
    else:
        transcript.update(success=True, session_id=session_id)
    return transcript


__all__ = ["authenticate", "register_user"]
