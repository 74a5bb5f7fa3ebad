"""Command line interface for the Chaum-Pedersen authentication service."""

from __future__ import annotations

import argparse
import json
import sys

from cpauth.auth import authenticate, register_user
from cpauth.config import get_settings
from cpauth.crypto import DEFAULT_PARAMETERS, encode_hex, generate_secret
from cpauth.errors import AuthError
from cpauth.logging_config import setup_logging
from cpauth.verifier import VerifierService


def parse_secret(value: str) -> int:
    """Secrets are decimal by default; a ``0x`` prefix selects hex."""

    try:
        secret = int(value, 0) if value.lower().startswith("0x") else int(value, 10)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid secret {value!r}") from exc
    if secret < 0:
        raise argparse.ArgumentTypeError("Secret must be non-negative")
    return secret


def parse_args(argv: list[str]) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help=f"Log level (default: {settings.log_level})",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the verifier HTTP service")
    serve_parser.add_argument("--host", default=settings.host)
    serve_parser.add_argument("--port", type=int, default=settings.port)

    for name, help_text in (
        ("register", "Register a user with a running verifier"),
        ("login", "Authenticate a user against a running verifier"),
    ):
        client_parser = subparsers.add_parser(name, help=help_text)
        client_parser.add_argument("user", help="User identifier")
        client_parser.add_argument(
            "secret",
            nargs="?" if name == "register" else None,
            type=parse_secret,
            help=(
                "Secret number (decimal, or hex with 0x prefix). "
                "If omitted on register a random value is generated and printed."
            ),
        )
        client_parser.add_argument(
            "--server",
            default=settings.server_url,
            help=f"Verifier base URL (default: {settings.server_url})",
        )

    demo_parser = subparsers.add_parser(
        "demo",
        help="Register, challenge and verify in-process without a server",
    )
    demo_parser.add_argument("user", nargs="?", default="user123")
    demo_parser.add_argument("secret", nargs="?", type=parse_secret, default=123456789)

    subparsers.add_parser("params", help="Print the fixed group parameters")

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    namespace = parse_args(sys.argv[1:] if argv is None else argv)
    settings = get_settings()
    setup_logging(namespace.log_level, settings.log_format)

    if namespace.command == "serve":
        import uvicorn

        from cpauth.server import create_app

        uvicorn.run(create_app(), host=namespace.host, port=namespace.port, log_config=None)
        return 0

    if namespace.command == "params":
        params = DEFAULT_PARAMETERS
        payload = {name: encode_hex(getattr(params, name)) for name in ("p", "q", "g", "h")}
        print(json.dumps(payload, indent=2))
        return 0

    if namespace.command == "demo":
        service = VerifierService()
        try:
            registration = register_user(service, namespace.user, namespace.secret)
            result = authenticate(service, namespace.user, namespace.secret)
        except AuthError as exc:
            print(f"{exc.kind.value}: {exc.message}", file=sys.stderr)
            return 1
        record = service.get_user(namespace.user)
        payload = {
            "registration": registration,
            "authentication": result,
            "record": record.to_dict() if record is not None else None,
        }
        print(json.dumps(payload, indent=2))
        return 0 if result["success"] else 1

    if namespace.command in ("register", "login"):
        import httpx

        from cpauth.client import ProverClient

        secret = namespace.secret
        generated = secret is None
        if generated:
            secret = generate_secret()
        try:
            with ProverClient(namespace.server, timeout=settings.request_timeout) as client:
                if namespace.command == "register":
                    client.register_secret(namespace.user, secret)
                    payload = {"user": namespace.user, "registered": True}
                    if generated:
                        payload["secret"] = str(secret)
                else:
                    session_id = client.login(namespace.user, secret)
                    payload = {"user": namespace.user, "session_id": session_id}
        except AuthError as exc:
            print(f"{exc.kind.value}: {exc.message}", file=sys.stderr)
            return 1
        except httpx.HTTPError as exc:
            print(f"Cannot reach verifier at {namespace.server}: {exc}", file=sys.stderr)
            return 1
        print(json.dumps(payload, indent=2))
        return 0

    raise RuntimeError("Unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
