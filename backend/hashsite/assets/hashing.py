"""Content hashing for published files. Hash is SHA-256 of the file body."""

import hashlib


def compute_hash(body: bytes) -> str:
    """SHA-256 hex digest of file body."""
    return hashlib.sha256(body).hexdigest()
