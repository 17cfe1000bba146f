from typing import Dict, Iterable, List

from .distrib import Distrib


def demo_keys(total: int, prefix: str = "key:") -> List[str]:
    return [f"{prefix}{i}" for i in range(1, total + 1)]


def distribution(d: Distrib, keys: Iterable[str]) -> Dict[str, int]:
    """Count how many keys land on each backend (first backend of each mapping)."""
    counts: Dict[str, int] = {b: 0 for b in d.backends}
    for key in keys:
        owner = d.owner(key)
        counts[owner] = counts.get(owner, 0) + 1
    return counts


def shares(counts: Dict[str, int]) -> Dict[str, float]:
    total = sum(counts.values())
    if not total:
        return {b: 0.0 for b in counts}
    return {b: n / total for b, n in counts.items()}


def moved_fraction(before: Distrib, after: Distrib, keys: Iterable[str]) -> float:
    """Fraction of keys whose owner differs between two rings."""
    total = 0
    moved = 0
    for key in keys:
        total += 1
        if before.owner(key) != after.owner(key):
            moved += 1
    return moved / total if total else 0.0
