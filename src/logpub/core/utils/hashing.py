"""SHA-256 hashing for post change detection"""

import hashlib
import json


def sha256(content: str) -> str:
    """Return hex-encoded SHA-256 of a string (64 chars, matches String(64) column)."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def hash_payload(data: dict) -> str:
    """Hash a JSON-serializable dict independently of key order."""
    return sha256(json.dumps(data, sort_keys=True, separators=(",", ":")))
