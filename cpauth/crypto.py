"""Group arithmetic and proof helpers for the Chaum-Pedersen protocol."""

from __future__ import annotations

import binascii
import secrets
from dataclasses import dataclass
from typing import Optional, Tuple

from .constants import G, H, ID_ALPHABET, ID_LENGTH, P, Q
from .errors import InvalidArgumentError


@dataclass(frozen=True)
class GroupParameters:
    """Public group description shared out-of-band by prover and verifier."""

    p: int
    q: int
    g: int
    h: int

    @property
    def byte_length(self) -> int:
        """Size of the canonical encoding of the largest group element."""

        return (self.p.bit_length() + 7) // 8

    def validate(self) -> None:
        if self.p < 3 or self.q < 2:
            raise ValueError("Modulus and order must be greater than one")
        if (self.p - 1) % self.q != 0:
            raise ValueError("Subgroup order must divide p - 1")
        for name, generator in (("g", self.g), ("h", self.h)):
            if not 1 < generator < self.p:
                raise ValueError(f"Generator {name} outside of (1, p)")
            if pow(generator, self.q, self.p) != 1:
                raise ValueError(f"Generator {name} does not have order q")
        if self.g == self.h:
            raise ValueError("Generators must be independent")


DEFAULT_PARAMETERS = GroupParameters(p=P, q=Q, g=G, h=H)


@dataclass
class ChallengeCommitment:
    """Per-attempt values produced by the prover before asking for a challenge."""

    blinding: int
    r1: int
    r2: int


def exponentiate(base: int, exponent: int, modulus: int) -> int:
    if exponent < 0:
        raise ValueError("Exponent must be non-negative")
    return pow(base, exponent, modulus)


def random_scalar(order: int) -> int:
    """Uniform value in ``[0, order)`` from the system CSPRNG."""

    if order < 1:
        raise ValueError("Order must be positive")
    return secrets.randbelow(order)


def random_identifier(length: int = ID_LENGTH) -> str:
    """Unpredictable alphanumeric identifier used for auth and session ids."""

    if length < 1:
        raise ValueError("Identifier length must be positive")
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(length))


def encode(value: int) -> bytes:
    """Canonical minimal big-endian encoding; zero encodes as a single byte."""

    if not isinstance(value, int) or value < 0:
        raise ValueError("Only non-negative integers can be encoded")
    length = max(1, (value.bit_length() + 7) // 8)
    return value.to_bytes(length, "big")


def decode(data: bytes, max_length: Optional[int] = None) -> int:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise InvalidArgumentError("Encoded integer must be a byte string")
    if len(data) == 0:
        raise InvalidArgumentError("Encoded integer is empty")
    if max_length is not None and len(data) > max_length:
        raise InvalidArgumentError(
            f"Encoded integer is {len(data)} bytes, limit is {max_length}"
        )
    return int.from_bytes(bytes(data), "big")


def encode_hex(value: int) -> str:
    return encode(value).hex()


def hex_to_bytes(text: str) -> bytes:
    if not isinstance(text, str):
        raise InvalidArgumentError("Encoded integer must be a hex string")
    try:
        return binascii.unhexlify(text)
    except (binascii.Error, ValueError) as exc:
        raise InvalidArgumentError("Encoded integer is not valid hex") from exc


def decode_hex(text: str, max_length: Optional[int] = None) -> int:
    """Decode the hex rendering of a canonical encoding used on the wire."""

    return decode(hex_to_bytes(text), max_length=max_length)


def compute_response(secret: int, blinding: int, challenge: int, order: int) -> int:
    """Prover response ``s = k - c*x mod q``; Python's ``%`` keeps it in range."""

    return (blinding - challenge * secret) % order


def verify_proof(
    modulus: int,
    y1: int,
    y2: int,
    r1: int,
    r2: int,
    g: int,
    h: int,
    challenge: int,
    s: int,
) -> bool:
    """Check both Chaum-Pedersen equations; either one failing rejects the proof."""

    if s < 0 or challenge < 0:
        return False
    left1 = (pow(g, s, modulus) * pow(y1, challenge, modulus)) % modulus
    left2 = (pow(h, s, modulus) * pow(y2, challenge, modulus)) % modulus
    return left1 == r1 and left2 == r2


def derive_commitments(secret: int, params: GroupParameters = DEFAULT_PARAMETERS) -> Tuple[int, int]:
    """Public registration values ``(g^x mod p, h^x mod p)`` for a secret."""

    if secret < 0:
        raise ValueError("Secret must be non-negative")
    return exponentiate(params.g, secret, params.p), exponentiate(params.h, secret, params.p)


class ChaumPedersenProver:
    """Prover that holds the long-lived secret and answers challenges."""

    def __init__(self, secret: int, params: GroupParameters = DEFAULT_PARAMETERS) -> None:
        if secret < 0:
            raise ValueError("Secret must be non-negative")
        self.secret = secret
        self.params = params

    def register(self) -> Tuple[int, int]:
        return derive_commitments(self.secret, self.params)

    def begin_challenge(self) -> ChallengeCommitment:
        # A blinding value must never be reused across attempts.
        blinding = random_scalar(self.params.q)
        return ChallengeCommitment(
            blinding=blinding,
            r1=exponentiate(self.params.g, blinding, self.params.p),
            r2=exponentiate(self.params.h, blinding, self.params.p),
        )

    def respond(self, blinding: int, challenge: int) -> int:
        return compute_response(self.secret, blinding, challenge, self.params.q)


def generate_secret(params: GroupParameters = DEFAULT_PARAMETERS) -> int:
    """Generate a fresh non-zero secret in the subgroup's exponent range."""

    return random_scalar(params.q - 1) + 1

