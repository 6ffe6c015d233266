"""
Password hashing and bearer token utilities.

Responsibilities:
- Hash passwords using Argon2id and verify them with the hasher's own routine
- Issue HS256 bearer tokens carrying the user id, username and a unique jti
- Decode tokens, reporting why a token was rejected as a `TokenRejection`
"""
from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTError

_argon2 = PasswordHasher(time_cost=2, memory_cost=102400, parallelism=8, hash_len=32)


class TokenRejection(str, Enum):
    MISSING = "MISSING_TOKEN"
    MALFORMED = "MALFORMED_TOKEN"
    EXPIRED = "TOKEN_EXPIRED"
    SUBJECT_GONE = "SUBJECT_GONE"
    REVOKED = "TOKEN_REVOKED"


class TokenRejected(Exception):
    def __init__(self, reason: TokenRejection):
        super().__init__(reason.value)
        self.reason = reason


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    username: str
    jti: str
    issued_at: int
    expires_at: int


def hash_password(password: str) -> str:
    """Return a salted Argon2id hash of the password."""
    return _argon2.hash(password)


def verify_password(password: str, encoded_hash: str) -> bool:
    if not password or not encoded_hash:
        return False
    try:
        return _argon2.verify(encoded_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def issue_token(
    user_id: int,
    username: str,
    *,
    secret: str,
    algorithm: str = "HS256",
    ttl_seconds: int = 3600,
    now: Optional[int] = None,
) -> str:
    """Return a signed token valid for `ttl_seconds` from `now` (epoch seconds)."""
    issued_at = int(time.time()) if now is None else int(now)
    payload = {
        "sub": str(user_id),
        "username": username,
        "jti": uuid.uuid4().hex,
        "iat": issued_at,
        "exp": issued_at + ttl_seconds,
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_token(token: str, *, secret: str, algorithm: str = "HS256") -> TokenClaims:
    """Verify signature and expiry and return the claims.

    Raises TokenRejected(EXPIRED) for an expired token and
    TokenRejected(MALFORMED) for anything else that fails to verify.
    """
    if not token:
        raise TokenRejected(TokenRejection.MISSING)
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except ExpiredSignatureError:
        raise TokenRejected(TokenRejection.EXPIRED)
    except JWTError:
        raise TokenRejected(TokenRejection.MALFORMED)
    try:
        return TokenClaims(
            user_id=int(payload["sub"]),
            username=str(payload["username"]),
            jti=str(payload["jti"]),
            issued_at=int(payload["iat"]),
            expires_at=int(payload["exp"]),
        )
    except (KeyError, TypeError, ValueError):
        raise TokenRejected(TokenRejection.MALFORMED)
