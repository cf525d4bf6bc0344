"""Credentials — password hashing and bearer-token issuance/verification.

Invariants:
    - Plain passwords never leave this module; only werkzeug hashes are stored
    - Tokens are HS256 JWTs carrying the account id in `sub`, with iat/exp claims
    - Any token problem (bad signature, expired, malformed, wrong claim type) raises
      AuthenticationError — callers never see PyJWT exceptions
"""

import logging
from datetime import datetime, timedelta, timezone

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from merchcoin.core.domain_types import AccountId
from merchcoin.core.errors import AuthenticationError

logger = logging.getLogger(__name__)

TOKEN_ALGORITHM = "HS256"


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    return check_password_hash(password_hash, password)


class TokenIssuer:
    """Signs and verifies account bearer tokens."""

    def __init__(self, secret_key: str, ttl: timedelta = timedelta(hours=12)):
        self._secret_key = secret_key
        self._ttl = ttl

    def issue(self, account_id: AccountId) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": str(account_id),
            "iat": now,
            "exp": now + self._ttl,
        }
        return jwt.encode(claims, self._secret_key, algorithm=TOKEN_ALGORITHM)

    def verify(self, token: str) -> AccountId:
        """Decode token and return the account id it was issued for."""
        try:
            claims = jwt.decode(
                token, self._secret_key, algorithms=[TOKEN_ALGORITHM],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            logger.warning("Rejected expired token")
            raise AuthenticationError("invalid or expired token")
        except jwt.InvalidTokenError as e:
            logger.warning(f"Rejected token: {e}")
            raise AuthenticationError("invalid or expired token")
        subject = claims["sub"]
        if not isinstance(subject, str) or not subject.isdigit():
            logger.warning("Rejected token with non-numeric subject")
            raise AuthenticationError("invalid or expired token")
        return AccountId(int(subject))
