import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from .config import DistribConfig
from .logging_setup import setup_logging
from .ring import WeightedRing
from .stats import demo_keys, distribution, shares

log = logging.getLogger("api")

MAX_DISTRIBUTION_KEYS = 100_000


class MapResp(BaseModel):
    key: str
    count: int
    backends: List[str]


class DistributionReq(BaseModel):
    keys: Optional[List[str]] = None
    prefix: str = "key:"
    total: int = Field(default=10_000, ge=1, le=MAX_DISTRIBUTION_KEYS)


def create_app(cfg: DistribConfig) -> FastAPI:
    setup_logging(cfg.debug)
    # ConfigurationError propagates: a bad config never gets served
    d = cfg.build()
    app = FastAPI(title=f"Distrib ({d.algorithm.value})")

    @app.on_event("startup")
    async def _startup():
        log.info("Serving %s ring over backends %s", d.algorithm.value, d.weights)

    @app.get("/health")
    def health():
        return {"ok": True, "algorithm": d.algorithm.value, "backends": d.backends}

    @app.get("/map", response_model=MapResp)
    def map_key(key: str, count: int = Query(default=1, ge=1)):
        return MapResp(key=key, count=count, backends=d.map(key, count))

    @app.post("/distribution")
    def key_distribution(req: DistributionReq):
        if req.keys is not None:
            if len(req.keys) > MAX_DISTRIBUTION_KEYS:
                raise HTTPException(status_code=413, detail={"error": "too_many_keys", "max": MAX_DISTRIBUTION_KEYS})
            keys = req.keys
        else:
            keys = demo_keys(req.total, req.prefix)
        counts = distribution(d, keys)
        return {"total": len(keys), "counts": counts, "shares": shares(counts)}

    @app.get("/debug/state")
    def debug_state():
        state = {
            "algorithm": d.algorithm.value,
            "weights": d.weights,
            "replicas": d.replicas,
            "ring": d.ring.describe(),
            "cache": {"size": len(d.cache), "capacity": d.cache.capacity, "clears": d.cache.clears},
        }
        if isinstance(d.ring, WeightedRing):
            state["slices_count"] = d.ring.slices_count
            state["empty_slices"] = d.ring.empty_slices
        return state

    return app
