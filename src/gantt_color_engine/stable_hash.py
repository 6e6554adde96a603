from __future__ import annotations

import struct
from typing import Iterable

_HASH_SEED = 5381
_HASH_MASK = 0x7FFFFFFF


def stable_hash(text: str) -> int:
    """
    DJB2 hash over the UTF-16 code units of text, kept to 31 bits.

    Deterministic across runs and platforms (unlike the built-in hash()), so
    ids hashed in a browser and here land in the same palette slot.
    """

    data = text.encode("utf-16-le", "surrogatepass")
    value = _HASH_SEED
    for (unit,) in struct.iter_unpack("<H", data):
        value = (value * 33 + unit) & _HASH_MASK
    return value


def assign_palette_indices(ids: Iterable[str], palette_size: int) -> dict[str, int]:
    """
    Give each color-giver id a palette slot, avoiding collisions.

    Ids are processed in ascending hash order (id as tie-breaker), never in
    input order, so reordering the task list cannot change the result. A free
    preferred slot (hash mod palette_size) is kept as-is; colliding ids take the
    next free slot after their preferred one. Once the palette is exhausted the
    remaining ids fall back to their preferred slot and share a color.
    """

    if palette_size <= 0:
        return {}

    ranked = sorted((stable_hash(item_id), item_id) for item_id in set(ids))
    assigned: dict[str, int] = {}
    taken: set[int] = set()

    for hashed, item_id in ranked:
        preferred = hashed % palette_size
        if preferred not in taken:
            assigned[item_id] = preferred
            taken.add(preferred)

    for hashed, item_id in ranked:
        if item_id in assigned:
            continue
        preferred = hashed % palette_size
        for offset in range(1, palette_size + 1):
            candidate = (preferred + offset) % palette_size
            if candidate not in taken:
                assigned[item_id] = candidate
                taken.add(candidate)
                break

    for hashed, item_id in ranked:
        assigned.setdefault(item_id, hashed % palette_size)

    return assigned
