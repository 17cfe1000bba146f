import argparse
from distrib.config import DEMO_BACKENDS, DistribConfig, parse_backend_specs
from distrib.distrib import Distrib
from distrib.errors import ConfigurationError
from distrib.logging_setup import setup_logging
from distrib.ring import ALGORITHMS, DEFAULT_REPLICAS
from distrib.cache import DEFAULT_CACHE_MAX
from distrib.stats import demo_keys, distribution, moved_fraction, shares

def main():
    p = argparse.ArgumentParser(description="Map key:1..key:N and print how they spread over the backends")
    p.add_argument("--algorithm", choices=ALGORITHMS, default="consistent")
    p.add_argument("--backend", action="append", default=[], help="Backend as id=weight, repeatable")
    p.add_argument("--replicas", type=int, default=DEFAULT_REPLICAS)
    p.add_argument("--cache-max", type=int, default=DEFAULT_CACHE_MAX)
    p.add_argument("--keys", type=int, default=10000, help="Number of keys to map")
    p.add_argument("--remove", default=None, help="Also rebuild without this backend and report moved keys")
    p.add_argument("--debug", action="store_true")
    args = p.parse_args()

    setup_logging(args.debug)
    try:
        backends = parse_backend_specs(args.backend) if args.backend else dict(DEMO_BACKENDS)
        cfg = DistribConfig(args.algorithm, backends, replicas=args.replicas, cache_max=args.cache_max, debug=args.debug)
        d = cfg.build()
        if args.remove is not None and args.remove not in backends:
            raise ConfigurationError(f"Unknown backend to remove: {args.remove}")
    except ConfigurationError as e:
        p.error(str(e))

    keys = demo_keys(args.keys)
    counts = distribution(d, keys)
    total_weight = sum(backends.values())
    pct = shares(counts)
    print(f"{d.algorithm.value} over {len(keys)} keys")
    for backend, n in counts.items():
        expected = backends[backend] / total_weight
        print(f"  {backend:>12}  {n:>7}  {pct[backend]:6.1%}  (weight {expected:6.1%})")

    if args.remove is not None:
        rest = {b: w for b, w in backends.items() if b != args.remove}
        try:
            after = Distrib(args.algorithm, rest, replicas=args.replicas, cache_max=args.cache_max)
        except ConfigurationError as e:
            p.error(str(e))
        print(f"removing {args.remove}: {moved_fraction(d, after, keys):.1%} of keys moved")

if __name__ == "__main__":
    main()
