"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication. The
token is header + claims + HMAC signature; the claims carry the user's
email as "sub" and an absolute expiry as "exp". Nothing is stored
server-side, so logout is just the client discarding the token.

Validation happens in three steps (PyJWT does them in this order):
1. structure: three base64url segments of valid JSON
2. signature: HMAC over header+claims with our secret
3. expiry: "exp" must still be in the future

Every failure surfaces as the same AuthError. The reason is logged
for operators but never returned to the caller.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
import structlog

from taskify.config import Settings
from taskify.errors import AuthError

logger = structlog.get_logger()

INVALID_TOKEN = "Invalid or expired token"


class TokenService:
    """Issues and validates signed, time-bounded identity tokens.

    Holds only immutable configuration, so one instance is shared by
    every request.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=24),
    ):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            ttl=timedelta(minutes=settings.token_expire_minutes),
        )

    def issue(self, subject: str, now: Optional[datetime] = None) -> str:
        """Create a signed token for ``subject`` that expires after the TTL."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": subject,
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def validate(self, token: str) -> str:
        """Verify a token and return its subject.

        Raises AuthError on any failure.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            logger.info("auth.token_rejected", reason="expired")
            raise AuthError(INVALID_TOKEN)
        except jwt.InvalidSignatureError:
            logger.warning("auth.token_rejected", reason="invalid_signature")
            raise AuthError(INVALID_TOKEN)
        except jwt.MissingRequiredClaimError as e:
            logger.warning("auth.token_rejected", reason="missing_claim", claim=e.claim)
            raise AuthError(INVALID_TOKEN)
        except jwt.InvalidTokenError as e:
            logger.warning("auth.token_rejected", reason="malformed", error=str(e))
            raise AuthError(INVALID_TOKEN)

        subject = payload["sub"]
        if not isinstance(subject, str) or not subject:
            logger.warning("auth.token_rejected", reason="bad_subject")
            raise AuthError(INVALID_TOKEN)
        return subject
