import bisect
import logging
import math
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple, Union

from .errors import ConfigurationError
from .hashing import INT32_MIN, crc32, crc32_signed, round_half_up, to_signed

log = logging.getLogger("ring")

DEFAULT_REPLICAS = 256
# Replica positions per slice; replicas are rounded to a multiple of this.
SLICE_REPLICAS = 8

BackendSpec = Union[Mapping[Any, int], Iterable[Any]]


class Algorithm(str, Enum):
    NAIVE = "naive"
    CONSISTENT = "consistent"
    REDUNDANT = "redundant"


ALGORITHMS = tuple(a.value for a in Algorithm)


def parse_algorithm(algorithm: Union[str, Algorithm]) -> Algorithm:
    try:
        return Algorithm(algorithm)
    except ValueError:
        raise ConfigurationError(f"Unrecognized key distribution algorithm: {algorithm}") from None


def normalize_backends(backends: BackendSpec) -> List[Tuple[str, int]]:
    """Turn a mapping of id -> weight (or a plain iterable of ids, weight 1)
    into an ordered list of (id, weight) pairs."""
    if backends is None:
        items = []
    elif isinstance(backends, Mapping):
        items = list(backends.items())
    elif isinstance(backends, str):
        items = [(backends, 1)]
    else:
        items = [(b, 1) for b in backends]

    if not items:
        raise ConfigurationError("No backends to distribute keys against")

    out: List[Tuple[str, int]] = []
    seen = set()
    for backend, weight in items:
        bid = str(backend)
        if isinstance(weight, bool) or not isinstance(weight, int) or weight <= 0:
            raise ConfigurationError(f"Invalid weight for backend {bid}: {weight!r}")
        if bid in seen:
            raise ConfigurationError(f"Duplicate backend: {bid}")
        seen.add(bid)
        out.append((bid, weight))
    return out


def round_replicas(replicas: int) -> int:
    if replicas % SLICE_REPLICAS == 0:
        return replicas
    return max(SLICE_REPLICAS, round_half_up(replicas / SLICE_REPLICAS) * SLICE_REPLICAS)


def _slice_of(position: int, slices_div: float, slices_half: int, slices_count: int) -> int:
    # position is the signed view; the clamp only matters for float error at -2**31
    idx = int(math.floor(position / slices_div)) + slices_half
    return min(max(idx, 0), slices_count - 1)


class Ring:
    algorithm: Algorithm

    def lookup(self, key: str, count: int = 1) -> List[str]:
        raise NotImplementedError

    def describe(self) -> Dict[str, Any]:
        return {"algorithm": self.algorithm.value, "kind": type(self).__name__}


class SingleRing(Ring):
    """One backend: every key maps to it, no ring is built."""

    def __init__(self, algorithm: Algorithm, backend: str):
        self.algorithm = algorithm
        self.backend = backend

    def lookup(self, key: str, count: int = 1) -> List[str]:
        return [self.backend]


class NaiveRing(Ring):
    def __init__(self, slots: Sequence[str]):
        self.algorithm = Algorithm.NAIVE
        self.slots: Tuple[str, ...] = tuple(slots)

    @property
    def hashring_count(self) -> int:
        return len(self.slots)

    def lookup(self, key: str, count: int = 1) -> List[str]:
        position = abs(crc32_signed(key)) % len(self.slots)
        return [self.slots[position]]

    def describe(self) -> Dict[str, Any]:
        out = super().describe()
        out["hashring_count"] = self.hashring_count
        return out


class Slice:
    """Sorted position -> backend entries of one ring slice.

    Positions are stored unsigned. All entries of a slice share the same sign
    bit, so unsigned and signed order agree inside a slice.
    """

    __slots__ = ("positions", "backends", "_signed")

    def __init__(self, entries: Mapping[int, str]):
        ordered = sorted(entries.items())
        self.positions: Tuple[int, ...] = tuple(p for p, _ in ordered)
        self.backends: Tuple[str, ...] = tuple(b for _, b in ordered)
        self._signed: Tuple[int, ...] = tuple(to_signed(p) for p in self.positions)

    def __len__(self) -> int:
        return len(self.positions)

    def items(self) -> List[Tuple[int, str]]:
        return list(zip(self.positions, self.backends))

    def first_at_or_after(self, threshold: int) -> int:
        return bisect.bisect_left(self._signed, threshold)


class WeightedRing(Ring):
    def __init__(
        self,
        algorithm: Algorithm,
        slices: Sequence[Slice],
        slices_div: float,
        replicas: int,
        replica_counts: Mapping[str, int],
    ):
        self.algorithm = algorithm
        self.slices: Tuple[Slice, ...] = tuple(slices)
        self.slices_count = len(self.slices)
        self.slices_half = self.slices_count // 2
        self.slices_div = slices_div
        self.replicas = replicas
        self.replica_counts: Dict[str, int] = dict(replica_counts)

    @property
    def empty_slices(self) -> List[int]:
        return [i for i, s in enumerate(self.slices) if not len(s)]

    def slice_of(self, position: int) -> int:
        return _slice_of(position, self.slices_div, self.slices_half, self.slices_count)

    def lookup(self, key: str, count: int = 1) -> List[str]:
        if self.algorithm is Algorithm.CONSISTENT:
            count = 1

        threshold = crc32_signed(key)
        idx = self.slice_of(threshold)
        looped = False
        out: List[str] = []

        while True:
            current = self.slices[idx]
            for i in range(current.first_at_or_after(threshold), len(current)):
                backend = current.backends[i]
                if backend not in out:
                    out.append(backend)
                    if len(out) >= count:
                        return out

            idx += 1
            if idx >= self.slices_count:
                # Only one wrap; a second one returns whatever was found.
                if looped:
                    return out
                threshold = INT32_MIN
                idx = 0
                looped = True

    def describe(self) -> Dict[str, Any]:
        out = super().describe()
        out.update(
            {
                "replicas": self.replicas,
                "slices_count": self.slices_count,
                "positions": sum(len(s) for s in self.slices),
                "empty_slices": self.empty_slices,
                "replica_counts": dict(self.replica_counts),
            }
        )
        return out


def _build_naive(backends: List[Tuple[str, int]]) -> NaiveRing:
    slots: List[str] = []
    for backend, weight in backends:
        slots.extend([backend] * weight)
    return NaiveRing(slots)


def _build_weighted(algorithm: Algorithm, backends: List[Tuple[str, int]], replicas: int) -> WeightedRing:
    replicas = round_replicas(replicas)
    total_replicas = replicas * len(backends)

    slices_count = total_replicas // SLICE_REPLICAS
    if slices_count % 2:
        slices_count += 1
    slices_half = slices_count // 2
    slices_div = 2147483648 / slices_half

    multiplier = total_replicas / sum(w for _, w in backends)

    buckets: List[Dict[int, str]] = [{} for _ in range(slices_count)]
    replica_counts: Dict[str, int] = {}
    for backend, weight in backends:
        n = round_half_up(weight * multiplier)
        replica_counts[backend] = n
        for i in range(n):
            position = crc32(f"{backend}:{i}")
            idx = _slice_of(to_signed(position), slices_div, slices_half, slices_count)
            buckets[idx][position] = backend

    ring = WeightedRing(algorithm, [Slice(b) for b in buckets], slices_div, replicas, replica_counts)

    empty = ring.empty_slices
    if empty:
        log.warning("Ring has %d empty slice(s) out of %d: %s", len(empty), slices_count, empty)
    log.debug(
        "Built %s ring: backends=%d replicas=%d slices=%d positions=%d",
        algorithm.value, len(backends), replicas, slices_count, sum(len(s) for s in ring.slices),
    )
    return ring


def build_ring(algorithm: Union[str, Algorithm], backends: BackendSpec, replicas: int = DEFAULT_REPLICAS) -> Ring:
    algo = parse_algorithm(algorithm)
    items = normalize_backends(backends)
    if isinstance(replicas, bool) or not isinstance(replicas, int) or replicas <= 0:
        raise ConfigurationError(f"Replicas must be a positive integer, got {replicas!r}")

    if len(items) == 1:
        return SingleRing(algo, items[0][0])
    if algo is Algorithm.NAIVE:
        return _build_naive(items)
    return _build_weighted(algo, items, replicas)
