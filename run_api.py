import argparse
import uvicorn
from distrib.api import create_app
from distrib.config import DEMO_BACKENDS, DistribConfig, parse_backend_specs
from distrib.errors import ConfigurationError
from distrib.ring import ALGORITHMS, DEFAULT_REPLICAS
from distrib.cache import DEFAULT_CACHE_MAX

def main():
    p = argparse.ArgumentParser()
    p.add_argument("--algorithm", choices=ALGORITHMS, default="consistent")
    p.add_argument("--backend", action="append", default=[], help="Backend as id=weight, repeatable, e.g. --backend cache-a=10")
    p.add_argument("--replicas", type=int, default=DEFAULT_REPLICAS, help="Replicas per backend (rounded to a multiple of 8)")
    p.add_argument("--cache-max", type=int, default=DEFAULT_CACHE_MAX, help="Result cache slots, 0 disables the cache")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=8000)
    p.add_argument("--debug", action="store_true")
    args = p.parse_args()

    try:
        backends = parse_backend_specs(args.backend) if args.backend else dict(DEMO_BACKENDS)
        cfg = DistribConfig(
            algorithm=args.algorithm,
            backends=backends,
            replicas=args.replicas,
            cache_max=args.cache_max,
            debug=args.debug,
        )
        app = create_app(cfg)
    except ConfigurationError as e:
        p.error(str(e))

    uvicorn.run(app, host=args.host, port=args.port)

if __name__ == "__main__":
    main()
