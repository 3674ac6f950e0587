"""
Security helpers for password hashing and session tokens.

Session tokens are JSON Web Tokens signed with HMAC-SHA256 and
base64url encoded.  They carry the ``user_id`` and ``email`` claims
together with ``iat`` and ``exp`` timestamps and are verified by
signature and expiry only; nothing is persisted.  The signing secret
comes from ``settings.secret_key`` and is shared by the whole process.

Passwords are hashed with PBKDF2-HMAC-SHA256 and a random 16-byte
salt.  The stored string records the iteration count so hashes remain
verifiable after ``PASSWORD_HASH_ITERATIONS`` is raised.
"""

import base64
import hashlib
import hmac
import json
import os
import time
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings
from .errors import ForbiddenError

ALGORITHM = "HS256"


def _now() -> int:
    return int(time.time())


def _b64_url_encode(data: bytes) -> str:
    """Base64-url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64-url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    """Compute HMAC-SHA256 signature of a message using the given secret."""
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[int] = None,
    secret: Optional[str] = None,
) -> str:
    """Create a signed JWT with the given claims.

    The payload is extended with ``iat`` and ``exp`` (UNIX timestamps).
    The token is a string of the form ``header.payload.signature``,
    where each part is base64url encoded.

    Parameters
    ----------
    data : dict
        Claims to embed in the token.
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.
    secret : Optional[str]
        Signing secret.  Defaults to ``settings.secret_key``.
    """
    to_encode = data.copy()
    lifetime = expires_delta if expires_delta is not None else settings.access_token_expire_minutes * 60
    issued_at = _now()
    to_encode["iat"] = issued_at
    to_encode["exp"] = issued_at + lifetime
    header = {"alg": ALGORITHM, "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, secret or settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def issue_session_token(user_id: str, email: str) -> str:
    """Mint a session token for an authenticated user."""
    return create_access_token({"user_id": str(user_id), "email": email})


def decode_access_token(token: Optional[str], secret: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """Verify and decode a JWT.

    Returns the payload if the header names ``HS256``, the signature
    matches and ``exp`` lies in the future; otherwise ``None``.  The
    signature is compared in its encoded form so that a token differing
    in any character, including unused trailing bits, is rejected.
    """
    if not token:
        return None
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    expected_sig = _b64_url_encode(_sign(signing_input, secret or settings.secret_key))
    # Constant-time comparison to prevent timing attacks
    if not hmac.compare_digest(expected_sig.encode("utf-8"), signature_b64.encode("utf-8")):
        return None
    try:
        header = json.loads(_b64_url_decode(header_b64).decode("utf-8"))
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, TypeError):
        return None
    if not isinstance(header, dict) or header.get("alg") != ALGORITHM:
        return None
    if not isinstance(data, dict):
        return None
    try:
        expires_at = int(data["exp"])
    except (KeyError, TypeError, ValueError):
        return None
    if expires_at <= _now():
        return None
    return data


def verify_session_token(token: Optional[str]) -> Dict[str, Any]:
    """Return the claims of a valid token or raise ``ForbiddenError``."""
    payload = decode_access_token(token)
    if payload is None:
        raise ForbiddenError("Invalid or expired token")
    return payload


security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Dict[str, Any]:
    """Dependency that retrieves the claims of the authenticated caller.

    A missing ``Authorization`` header, a malformed or tampered token
    and an expired token all answer HTTP 403.
    """
    token = credentials.credentials if credentials is not None else None
    try:
        return verify_session_token(token)
    except ForbiddenError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message) from e


def hash_password(password: str, iterations: Optional[int] = None) -> str:
    """Hash a password using PBKDF2-HMAC with SHA-256.

    Returns ``"<iterations>$<salt hex>$<hash hex>"``.
    """
    rounds = iterations or settings.password_hash_iterations
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, rounds)
    return f"{rounds}${salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored hash string.

    Recomputes the PBKDF2-HMAC digest with the stored salt and
    iteration count and compares it in constant time.  Malformed
    stored values never match.
    """
    try:
        rounds, salt_hex, hash_hex = hashed_password.split("$", 2)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
        dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, int(rounds))
    except (AttributeError, ValueError):
        return False
    return hmac.compare_digest(dk, stored_hash)
