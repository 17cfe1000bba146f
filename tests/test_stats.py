from distrib import Distrib
from distrib.stats import demo_keys, distribution, moved_fraction, shares


def test_demo_keys():
    assert demo_keys(3) == ["key:1", "key:2", "key:3"]
    assert demo_keys(2, prefix="user:") == ["user:1", "user:2"]


def test_distribution_counts_every_key(weights):
    d = Distrib("naive", weights)
    counts = distribution(d, demo_keys(500))
    assert list(counts) == ["A", "B", "C", "D", "E"]
    assert sum(counts.values()) == 500


def test_shares():
    assert shares({"a": 1, "b": 3}) == {"a": 0.25, "b": 0.75}
    assert shares({"a": 0}) == {"a": 0.0}


def test_moved_fraction_same_ring_is_zero(weights):
    d = Distrib("consistent", weights)
    assert moved_fraction(d, Distrib("consistent", weights), demo_keys(200)) == 0.0
    assert moved_fraction(d, d, []) == 0.0
