# account_api/core/security.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import bcrypt
from jose import jwt, JWTError
from pydantic import ValidationError

from account_api.core.config import Settings
from account_api.schemas.user import TokenClaims

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class InvalidTokenError(Exception):
    """
    Raised for any token that must not be trusted.

    The cause (expired, tampered, malformed) is logged but deliberately
    not carried in the exception message.
    """


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CredentialService:
    """
    Password hashing and session token minting/verification.

    Responsibilities:
      - bcrypt hash/verify with a fixed cost factor
      - sign identity claims into an HS256 JWT that expires after
        `expires_in`
      - verify signature, algorithm and expiry of presented tokens

    No HTTP and no database access happen here.
    """

    def __init__(
        self,
        secret: str | None,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(hours=24),
        rounds: int = 11,
        clock: Clock | None = None,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in
        self.rounds = rounds
        self.clock = clock or _utcnow

    @classmethod
    def from_settings(cls, settings: Settings, clock: Clock | None = None) -> "CredentialService":
        return cls(
            secret=settings.JWT_SECRET,
            algorithm=settings.JWT_ALG,
            expires_in=timedelta(hours=settings.JWT_EXPIRE_HOURS),
            rounds=settings.BCRYPT_ROUNDS,
            clock=clock,
        )

    # ----- Passwords -----

    def hash_password(self, password: str) -> str:
        """Hash a password with bcrypt (salt embedded in the output)."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify_password(self, password: str, hashed: str) -> bool:
        """
        Check `password` against a stored bcrypt hash.

        Returns False for a mismatch and for a malformed hash; it never
        raises for bad credentials.
        """
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    # ----- Tokens -----

    def _require_secret(self) -> str:
        if not self.secret:
            raise RuntimeError("JWT_SECRET is not configured")
        return self.secret

    def issue_token(self, claims: TokenClaims) -> str:
        """
        Sign `claims` into a bearer token.

        Adds `iat` (now) and `exp` (now + expires_in) as epoch seconds.

        Raises:
            RuntimeError: if no signing secret is configured.
        """
        secret = self._require_secret()
        issued_at = self.clock()
        payload: dict[str, Any] = claims.model_dump(by_alias=True)
        payload["iat"] = int(issued_at.timestamp())
        payload["exp"] = int((issued_at + self.expires_in).timestamp())
        return jwt.encode(payload, secret, algorithm=self.algorithm)

    def verify_token(self, token: str) -> TokenClaims:
        """
        Decode and verify a bearer token.

        Verification:
          - signature and algorithm (via python-jose)
          - expiration, checked against this service's clock
          - presence and types of the identity claims

        Raises:
            InvalidTokenError: for expired, tampered or malformed tokens.
            RuntimeError: if no signing secret is configured.
        """
        secret = self._require_secret()
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            logger.debug("Token rejected: %s", exc)
            raise InvalidTokenError() from exc

        exp = payload.get("exp")
        if not isinstance(exp, (int, float)) or exp <= self.clock().timestamp():
            logger.debug("Token rejected: expired or missing exp")
            raise InvalidTokenError()

        try:
            return TokenClaims.model_validate(payload)
        except ValidationError as exc:
            logger.debug("Token rejected: bad claims")
            raise InvalidTokenError() from exc
