import logging
from typing import Dict, List, Union

from .cache import DEFAULT_CACHE_MAX, ResultCache
from .errors import ConfigurationError
from .ring import DEFAULT_REPLICAS, Algorithm, BackendSpec, Ring, build_ring, normalize_backends, parse_algorithm

log = logging.getLogger("distrib")


class Distrib:
    """Maps keys to one or more weighted backends.

    `algorithm` is one of "naive", "consistent" or "redundant". `backends` is
    an ordered mapping of backend id -> positive integer weight. The ring is
    built once here and never changes; a topology change means a new instance.
    """

    def __init__(
        self,
        algorithm: Union[str, Algorithm],
        backends: BackendSpec,
        replicas: int = DEFAULT_REPLICAS,
        cache_max: int = DEFAULT_CACHE_MAX,
    ):
        algo = parse_algorithm(algorithm)
        items = normalize_backends(backends)
        if isinstance(cache_max, bool) or not isinstance(cache_max, int) or cache_max < 0:
            raise ConfigurationError(f"Cache size must be a non-negative integer, got {cache_max!r}")

        self._algorithm = algo
        self._weights: Dict[str, int] = dict(items)
        self._ids: List[str] = [b for b, _ in items]
        self._replicas = replicas
        self._ring: Ring = build_ring(algo, self._weights, replicas)
        self._cache = ResultCache(cache_max)
        log.debug("Distrib ready: algorithm=%s backends=%s", algo.value, self._ids)

    @classmethod
    def from_config(cls, cfg) -> "Distrib":
        return cls(cfg.algorithm, cfg.backends, replicas=cfg.replicas, cache_max=cfg.cache_max)

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    @property
    def backends(self) -> List[str]:
        return list(self._ids)

    @property
    def weights(self) -> Dict[str, int]:
        return dict(self._weights)

    @property
    def backend_count(self) -> int:
        return len(self._ids)

    @property
    def replicas(self) -> int:
        return self._replicas

    @property
    def ring(self) -> Ring:
        return self._ring

    @property
    def cache(self) -> ResultCache:
        return self._cache

    def map(self, key: str, count: int = 1) -> List[str]:
        """Return up to `count` distinct backend ids for `key`, in ring order.

        With the redundant algorithm the result can be shorter than requested
        if one full pass around the ring did not turn up enough backends.
        """
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise ValueError(f"count must be a positive integer, got {count!r}")
        key = str(key)

        if len(self._ids) == 1:
            return [self._ids[0]]

        cache_key = (key, count)
        cached = self._cache.get(cache_key)
        if cached is not None:
            return list(cached)

        if count >= len(self._ids):
            return list(self._ids)

        result = self._ring.lookup(key, count)
        self._cache.put(cache_key, result)
        return list(result)

    def owner(self, key: str) -> str:
        return self.map(key, 1)[0]

    def __repr__(self) -> str:
        return f"Distrib(algorithm={self._algorithm.value!r}, backends={self._weights!r})"
