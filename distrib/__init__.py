from .cache import DEFAULT_CACHE_MAX, ResultCache
from .config import DistribConfig, parse_backend_specs
from .distrib import Distrib
from .errors import ConfigurationError
from .ring import ALGORITHMS, DEFAULT_REPLICAS, Algorithm, build_ring

__all__ = [
    "ALGORITHMS",
    "Algorithm",
    "ConfigurationError",
    "DEFAULT_CACHE_MAX",
    "DEFAULT_REPLICAS",
    "Distrib",
    "DistribConfig",
    "ResultCache",
    "build_ring",
    "parse_backend_specs",
]
