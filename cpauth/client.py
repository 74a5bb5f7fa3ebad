"""HTTP client used by the prover to talk to a running verifier."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import httpx

from .crypto import DEFAULT_PARAMETERS, ChaumPedersenProver, GroupParameters, decode_hex, encode_hex
from .errors import InternalError, error_from_kind

logger = logging.getLogger(__name__)


class ProverClient:
    """Thin wrapper over the three remote protocol operations.

    ``http`` may be any ``httpx.Client``; tests pass FastAPI's ``TestClient``.
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:50051",
        *,
        timeout: float = 10.0,
        http: Optional[httpx.Client] = None,
        params: GroupParameters = DEFAULT_PARAMETERS,
    ) -> None:
        self.params = params
        self._owns_http = http is None
        self._http = http if http is not None else httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "ProverClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _post(self, path: str, payload: Dict[str, str]) -> Dict[str, Any]:
        response = self._http.post(path, json=payload)
        if response.is_success:
            return response.json()
        try:
            body = response.json()
        except ValueError:
            body = {}
        if isinstance(body, dict) and "error" in body:
            raise error_from_kind(body["error"], str(body.get("detail", "")))
        raise InternalError(f"{path} returned HTTP {response.status_code}")

    def register(self, user: str, y1: int, y2: int) -> None:
        self._post("/register", {"user": user, "y1": encode_hex(y1), "y2": encode_hex(y2)})

    def create_challenge(self, user: str, r1: int, r2: int) -> Tuple[str, int]:
        body = self._post("/challenge", {"user": user, "r1": encode_hex(r1), "r2": encode_hex(r2)})
        return body["auth_id"], decode_hex(body["c"])

    def verify_authentication(self, auth_id: str, s: int) -> str:
        body = self._post("/verify", {"auth_id": auth_id, "s": encode_hex(s)})
        return body["session_id"]

    def register_secret(self, user: str, secret: int) -> None:
        prover = ChaumPedersenProver(secret, self.params)
        y1, y2 = prover.register()
        logger.info("Registering user %s", user)
        self.register(user, y1, y2)

    def login(self, user: str, secret: int) -> str:
        """Run challenge and verification for ``user`` and return the session id."""

        prover = ChaumPedersenProver(secret, self.params)
        commitment = prover.begin_challenge()
        logger.info("Requesting authentication challenge for user %s", user)
        auth_id, challenge = self.create_challenge(user, commitment.r1, commitment.r2)
        response = prover.respond(commitment.blinding, challenge)
        logger.info("Sending authentication answer for auth id %s", auth_id)
        return self.verify_authentication(auth_id, response)


__all__ = ["ProverClient"]
