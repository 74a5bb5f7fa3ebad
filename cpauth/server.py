"""FastAPI-powered Chaum-Pedersen verifier service.

Integers travel as the hex rendering of their canonical big-endian encoding.
Handlers are plain functions so FastAPI runs them on its worker thread pool.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .crypto import encode_hex, hex_to_bytes
from .errors import AuthError
from .verifier import VerifierService

logger = logging.getLogger(__name__)


class RegisterRequest(BaseModel):
    user: str
    y1: str
    y2: str


class RegisterResponse(BaseModel):
    pass


class ChallengeRequest(BaseModel):
    user: str
    r1: str
    r2: str


class ChallengeResponse(BaseModel):
    auth_id: str
    c: str


class VerifyRequest(BaseModel):
    auth_id: str
    s: str


class VerifyResponse(BaseModel):
    session_id: str


class ParametersResponse(BaseModel):
    p: str
    q: str
    g: str
    h: str


def get_verifier(request: Request) -> VerifierService:
    return request.app.state.verifier


async def _auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.kind.value, "detail": exc.message},
    )


def create_app(verifier: Optional[VerifierService] = None) -> FastAPI:
    app = FastAPI(title="cp-auth", description="Chaum-Pedersen zero-knowledge authentication")
    app.state.verifier = verifier if verifier is not None else VerifierService()
    app.add_exception_handler(AuthError, _auth_error_handler)

    @app.post("/register", response_model=RegisterResponse)
    def register(
        request: RegisterRequest,
        service: VerifierService = Depends(get_verifier),
    ) -> RegisterResponse:
        service.register_encoded(request.user, hex_to_bytes(request.y1), hex_to_bytes(request.y2))
        return RegisterResponse()

    @app.post("/challenge", response_model=ChallengeResponse)
    def create_authentication_challenge(
        request: ChallengeRequest,
        service: VerifierService = Depends(get_verifier),
    ) -> ChallengeResponse:
        auth_id, c = service.create_challenge_encoded(
            request.user, hex_to_bytes(request.r1), hex_to_bytes(request.r2)
        )
        return ChallengeResponse(auth_id=auth_id, c=c.hex())

    @app.post("/verify", response_model=VerifyResponse)
    def verify_authentication(
        request: VerifyRequest,
        service: VerifierService = Depends(get_verifier),
    ) -> VerifyResponse:
        session_id = service.verify_authentication_encoded(request.auth_id, hex_to_bytes(request.s))
        return VerifyResponse(session_id=session_id)

    @app.get("/parameters", response_model=ParametersResponse)
    def parameters(service: VerifierService = Depends(get_verifier)) -> ParametersResponse:
        params = service.params
        payload: Dict[str, str] = {
            "p": encode_hex(params.p),
            "q": encode_hex(params.q),
            "g": encode_hex(params.g),
            "h": encode_hex(params.h),
        }
        return ParametersResponse(**payload)

    return app


app = create_app()


__all__ = ["app", "create_app"]
