from dataclasses import dataclass, field
from typing import Dict, Iterable

from .cache import DEFAULT_CACHE_MAX
from .distrib import Distrib
from .errors import ConfigurationError
from .ring import DEFAULT_REPLICAS

# Backend set used by the demo: Σweights = 75
DEMO_BACKENDS: Dict[str, int] = {"1": 10, "2": 20, "3": 20, "4": 10, "5": 15}


@dataclass
class DistribConfig:
    algorithm: str = "consistent"
    backends: Dict[str, int] = field(default_factory=lambda: dict(DEMO_BACKENDS))
    replicas: int = DEFAULT_REPLICAS
    cache_max: int = DEFAULT_CACHE_MAX
    debug: bool = False

    def build(self) -> Distrib:
        return Distrib.from_config(self)


def parse_backend_specs(specs: Iterable[str]) -> Dict[str, int]:
    """Parse "id=weight" strings (a bare "id" means weight 1)."""
    out: Dict[str, int] = {}
    for raw in specs:
        spec = raw.strip()
        if not spec:
            continue
        name, sep, weight = spec.rpartition("=")
        if not sep:
            name, weight = spec, "1"
        name = name.strip()
        if not name:
            raise ConfigurationError(f"Malformed backend spec: {raw!r}")
        try:
            w = int(weight)
        except ValueError:
            raise ConfigurationError(f"Malformed backend weight in {raw!r}") from None
        if name in out:
            raise ConfigurationError(f"Duplicate backend: {name}")
        out[name] = w
    return out
