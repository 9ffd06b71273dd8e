"""Read claims from app tokens without verifying them."""

from __future__ import annotations

import base64
import json
from typing import Any, Dict


def decode_claims(token: str) -> Dict[str, Any]:
    """Return the JSON body of a JWT, or an empty dict when it cannot be read."""
    parts = token.split(".")
    if len(parts) != 3:
        return {}
    body = parts[1]
    padded = body + "=" * (-len(body) % 4)
    try:
        decoded = base64.urlsafe_b64decode(padded.encode("ascii"))
        claims = json.loads(decoded)
    except (ValueError, UnicodeError):
        return {}
    return claims if isinstance(claims, dict) else {}


__all__ = ["decode_claims"]
