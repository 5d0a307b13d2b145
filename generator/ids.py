"""Identifier helpers for drafts, comments, changes and versions."""

import secrets
import string
import time

_ALPHABET = string.ascii_lowercase + string.digits


def generate_id(prefix: str = "item") -> str:
    """Return ``<prefix>-<epoch ms>-<7 random chars>``."""
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(7))
    return f"{prefix}-{int(time.time() * 1000)}-{suffix}"
