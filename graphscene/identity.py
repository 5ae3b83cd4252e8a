"""
Deterministic identity seeds for scene elements.

Every element carries an integer seed derived from a canonical key so that
identical graphs produce byte-identical scenes. The key parts are hashed
with SHA-256, each part followed by a NUL separator, and the first four
digest bytes are kept (masked to 31 bits so the value stays a positive
signed 32-bit integer for the renderer).
"""

import hashlib


def stable_seed(*parts: str | int | float) -> int:
    """
    Hash a canonical identity key into a stable positive integer.

    Args:
        parts: Key components in canonical order. Numbers are hashed by
            their ``str()`` form, so callers should round positions first.
            Positions are rounded half up (``floor(x + 0.5)``), not with
            Python's round-half-even ``round()``.

    Returns:
        An integer in ``[0, 2**31)``.
    """
    h = hashlib.sha256()
    for part in parts:
        h.update(str(part).encode("utf-8"))
        h.update(b"\0")
    return int.from_bytes(h.digest()[:4], "big") & 0x7FFFFFFF
