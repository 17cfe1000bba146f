import pytest

from distrib.config import DEMO_BACKENDS, DistribConfig, parse_backend_specs
from distrib.errors import ConfigurationError


def test_parse_backend_specs():
    assert parse_backend_specs(["cache-a=10", " cache-b = 20 ", "cache-c", ""]) == {
        "cache-a": 10,
        "cache-b": 20,
        "cache-c": 1,
    }


def test_parse_backend_specs_keeps_order():
    assert list(parse_backend_specs(["z=1", "a=1", "m=1"])) == ["z", "a", "m"]


@pytest.mark.parametrize("spec", ["a=x", "=3", "a=1.5"])
def test_parse_backend_specs_rejects_malformed(spec):
    with pytest.raises(ConfigurationError):
        parse_backend_specs([spec])


def test_parse_backend_specs_rejects_duplicates():
    with pytest.raises(ConfigurationError, match="Duplicate"):
        parse_backend_specs(["a=1", "a=2"])


def test_default_config_builds_demo_ring():
    d = DistribConfig().build()
    assert d.algorithm.value == "consistent"
    assert d.weights == DEMO_BACKENDS
    assert d.cache.capacity == 256


def test_bad_config_fails_on_build():
    cfg = DistribConfig(algorithm="naive", backends={"a": 0})
    with pytest.raises(ConfigurationError, match="Invalid weight"):
        cfg.build()
