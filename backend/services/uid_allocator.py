# backend/services/uid_allocator.py
"""
Installation UID = <part-name initials>-<global sequence, 4-digit zero pad>
e.g. "Elastic Rail Clip" #4 -> "ERC-0004"
"""
from __future__ import annotations

FALLBACK_PREFIX = "P"


def part_prefix(part_name: str | None) -> str:
    words = (part_name or "").split()
    prefix = "".join(w[0] for w in words).upper()
    return prefix or FALLBACK_PREFIX


def allocate_uid(part_name: str | None, sequence: int) -> str:
    # sequence 是全域計數，不會因 prefix 不同而重設
    return f"{part_prefix(part_name)}-{sequence:04d}"
