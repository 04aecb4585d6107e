"""Password hashing and signed bearer tokens (no external JWT dependency)."""

import base64
import hashlib
import hmac
import json
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from edutrackers.config import get_settings

_HASH_ITERATIONS = 120_000


def hash_password(password: str) -> str:
    """PBKDF2-SHA256 with a per-password salt, stored as ``salt$digest``."""
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), _HASH_ITERATIONS)
    return f"{salt}${digest.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    salt, _, expected = hashed_password.partition("$")
    if not expected:
        return False
    digest = hashlib.pbkdf2_hmac(
        "sha256", plain_password.encode(), salt.encode(), _HASH_ITERATIONS
    )
    return hmac.compare_digest(digest.hex(), expected)


def _sign(payload_b64: str) -> str:
    secret = get_settings().secret_key
    return hmac.new(secret.encode(), payload_b64.encode(), hashlib.sha256).hexdigest()


def create_token(identity_id: str, expires_in: Optional[timedelta] = None) -> str:
    """Create a ``payload.signature`` token for ``identity_id``."""
    lifetime = expires_in or timedelta(hours=get_settings().token_expire_hours)
    expire = datetime.now(timezone.utc) + lifetime
    payload = {"sub": identity_id, "exp": expire.isoformat()}
    payload_b64 = base64.urlsafe_b64encode(json.dumps(payload).encode()).decode()
    return f"{payload_b64}.{_sign(payload_b64)}"


def decode_token(token: str) -> Optional[dict]:
    """Return the payload, or ``None`` for malformed, forged or expired tokens."""
    parts = token.split(".")
    if len(parts) != 2:
        return None
    payload_b64, signature = parts
    if not hmac.compare_digest(signature, _sign(payload_b64)):
        return None
    try:
        payload = json.loads(base64.urlsafe_b64decode(payload_b64).decode())
        exp = datetime.fromisoformat(payload["exp"])
    except (ValueError, KeyError, TypeError):
        return None
    if datetime.now(timezone.utc) > exp:
        return None
    return payload
