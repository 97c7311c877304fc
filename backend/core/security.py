# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Central security module.  All cryptographic primitives live here.  No other
module should touch raw crypto directly.

Responsibilities
----------------
1. Password hashing / verification          (passlib bcrypt, cost 10)
2. JWT creation / decoding                  (PyJWT / HS256)
3. Password self-check used by the ``testPassword`` diagnostic query

Nothing in this module logs a plaintext password or a stored digest.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt as _jwt        # PyJWT
from passlib.hash import bcrypt as _bcrypt

from core.logger import logger
from users.errors import InvalidCredentialsError

# ---------------------------------------------------------------------------
# 1.  bcrypt – password hashing
# ---------------------------------------------------------------------------
# The salt is embedded in the "$2b$10$..." string, so a single column holds
# everything needed for verification.

BCRYPT_ROUNDS = 10
JWT_ALGORITHM = "HS256"


def hash_password(plain: str) -> str:
    """Hash a plaintext password with bcrypt (cost factor 10)."""
    return _bcrypt.using(rounds=BCRYPT_ROUNDS).hash(plain)


def verify_password(plain: str, stored_hash: str) -> bool:
    """
    Constant-time verification of a plaintext password against a bcrypt
    digest produced by :func:`hash_password`.
    """
    return _bcrypt.verify(plain, stored_hash)


def self_check_password(plain: str) -> bool:
    """
    Hash *plain* and immediately verify it against the fresh digest.

    Backs the ``testPassword`` diagnostic.  Only the boolean outcome is
    logged.
    """
    digest = hash_password(plain)
    valid = verify_password(plain, digest)
    logger.debug("password self-check result=%s", valid)
    return valid


# ---------------------------------------------------------------------------
# 2.  JWT – access tokens
# ---------------------------------------------------------------------------


def create_access_token(
    data: dict,
    secret: str,
    expires_minutes: int,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Sign a JWT with HS256.

    *data* should contain at minimum: sub (user id), user_id, role.
    An ``exp`` claim is added automatically.
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=expires_minutes)
    )
    to_encode["exp"] = expire
    return _jwt.encode(to_encode, secret, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str, secret: str) -> dict:
    """
    Decode and verify a JWT.  Raises :class:`InvalidCredentialsError` on any
    failure (expired, bad signature, malformed).

    Issued tokens are not checked by any operation yet; this is the primitive
    a future guard would call.
    """
    try:
        return _jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
    except (_jwt.ExpiredSignatureError, _jwt.InvalidTokenError) as exc:
        raise InvalidCredentialsError("Invalid or expired token") from exc
