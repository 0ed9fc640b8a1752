import os
from typing import Set


def safe_name(name: str, fallback: str = "item") -> str:
    sanitized = "".join(ch if ch.isalnum() or ch in "-_ " else "_" for ch in (name or ""))
    sanitized = sanitized.strip(" _")
    return sanitized or fallback


def unique_filename(filename: str, used: Set[str]) -> str:
    """Return ``filename`` or ``stem_N.ext`` so it does not collide with ``used``."""
    candidate = filename
    stem, ext = os.path.splitext(filename)
    counter = 2
    while candidate.lower() in used:
        candidate = f"{stem}_{counter}{ext}"
        counter += 1
    used.add(candidate.lower())
    return candidate
