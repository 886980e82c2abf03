"""JWT token creation and verification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

import jwt
import structlog

from task_manager_service.clock import Clock, utcnow
from task_manager_service.domain.errors import AppError

logger = structlog.get_logger(__name__)

ISSUER = "task-manager"
HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")


@dataclass
class TokenClaims:
    username: str
    role: str
    expires_at: datetime


class TokenService(Protocol):
    def generate_token(self, username: str, role: str) -> str: ...
    def validate_token(self, token: str) -> TokenClaims: ...


class JWTService:
    """Issues and validates HMAC-signed tokens with a single shared secret.

    The secret is handed in at construction; nothing here reads global state.
    Only the configured algorithm is accepted on validation, so tokens signed
    with ``none`` or an asymmetric algorithm are rejected outright.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=24),
        clock: Clock = utcnow,
    ) -> None:
        if algorithm not in HMAC_ALGORITHMS:
            raise ValueError(f"Unsupported signing algorithm: {algorithm}")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl
        self._clock = clock

    def generate_token(self, username: str, role: str) -> str:
        """Create a signed token for username/role expiring after the configured ttl."""
        now = self._clock()
        payload = {
            "sub": username,
            "username": username,
            "role": role,
            "iss": ISSUER,
            "iat": now,
            "exp": now + self._ttl,
        }
        try:
            return jwt.encode(payload, self._secret, algorithm=self._algorithm)
        except (jwt.PyJWTError, TypeError, ValueError) as exc:
            logger.error("token_signing_failed", error=str(exc))
            raise AppError.internal("error generating token") from exc

    def validate_token(self, token: str) -> TokenClaims:
        """Verify signature, algorithm, issuer and expiry. Raises an unauthorized AppError on failure."""
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                issuer=ISSUER,
                # Expiry is checked below against the injected clock.
                options={
                    "require": ["exp", "sub", "role"],
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidAlgorithmError as exc:
            raise AppError.unauthorized(
                f"unexpected signing method: {_unverified_alg(token)}"
            ) from exc
        except jwt.InvalidSignatureError as exc:
            raise AppError.unauthorized("signature is invalid") from exc
        except jwt.DecodeError as exc:
            raise AppError.unauthorized("token is malformed") from exc
        except jwt.PyJWTError as exc:
            raise AppError.unauthorized("invalid token") from exc

        try:
            expires_at = datetime.fromtimestamp(float(payload["exp"]), UTC)
        except (TypeError, ValueError, OverflowError) as exc:
            raise AppError.unauthorized("invalid token") from exc
        if expires_at <= self._clock():
            raise AppError.unauthorized("token is expired")

        username = payload.get("username") or payload["sub"]
        role = payload["role"]
        if not isinstance(username, str) or not isinstance(role, str) or not username or not role:
            raise AppError.unauthorized("invalid token")

        return TokenClaims(username=username, role=role, expires_at=expires_at)


def _unverified_alg(token: str) -> str:
    try:
        return str(jwt.get_unverified_header(token).get("alg"))
    except jwt.PyJWTError:
        return "unknown"
