"""Deterministic indicator colors for course names."""

import hashlib

COURSE_PALETTE = (
    0xFFE57373,
    0xFFF06292,
    0xFFBA68C8,
    0xFF64B5F6,
    0xFF4DB6AC,
    0xFFFFB74D,
)


def _stable_hash(seed: str) -> int:
    # Built-in hash() is salted per process; md5 keeps colors stable across runs.
    return int.from_bytes(hashlib.md5(seed.encode("utf-8")).digest()[:4], "big")


def pick_color(seed: str) -> int:
    """Return the ARGB palette color assigned to ``seed``."""
    return COURSE_PALETTE[(_stable_hash(seed) >> 1) % len(COURSE_PALETTE)]
