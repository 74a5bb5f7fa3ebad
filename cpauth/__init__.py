"""Chaum-Pedersen zero-knowledge authentication package."""

from .auth import authenticate, register_user
from .crypto import (
    DEFAULT_PARAMETERS,
    ChallengeCommitment,
    ChaumPedersenProver,
    GroupParameters,
    compute_response,
    decode,
    derive_commitments,
    encode,
    exponentiate,
    random_identifier,
    random_scalar,
    verify_proof,
)
from .errors import (
    AuthError,
    ErrorKind,
    InternalError,
    InvalidArgumentError,
    NotFoundError,
    UnauthenticatedError,
)
from .store import SessionStore, UserRecord, UserState
from .verifier import Challenge, VerifierService

__version__ = "0.1.0"

__all__ = [
    "authenticate",
    "register_user",
    "DEFAULT_PARAMETERS",
    "ChallengeCommitment",
    "ChaumPedersenProver",
    "GroupParameters",
    "compute_response",
    "decode",
    "derive_commitments",
    "encode",
    "exponentiate",
    "random_identifier",
    "random_scalar",
    "verify_proof",
    "AuthError",
    "ErrorKind",
    "InternalError",
    "InvalidArgumentError",
    "NotFoundError",
    "UnauthenticatedError",
    "SessionStore",
    "UserRecord",
    "UserState",
    "Challenge",
    "VerifierService",
]
