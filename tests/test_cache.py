from distrib.cache import ResultCache


def test_get_and_put():
    c = ResultCache(4)
    assert c.get("k") is None
    c.put("k", ["a", "b"])
    assert c.get("k") == ("a", "b")
    assert len(c) == 1


def test_overflow_clears_everything_then_inserts():
    c = ResultCache(2)
    c.put("a", ["x"])
    c.put("b", ["y"])
    assert len(c) == 2

    c.put("c", ["z"])

    assert len(c) == 1
    assert c.get("a") is None
    assert c.get("b") is None
    assert c.get("c") == ("z",)
    assert c.clears == 1


def test_overwriting_existing_key_does_not_clear():
    c = ResultCache(2)
    c.put("a", ["x"])
    c.put("b", ["y"])
    c.put("a", ["w"])
    assert len(c) == 2
    assert c.get("a") == ("w",)
    assert c.clears == 0


def test_zero_capacity_disables_cache():
    c = ResultCache(0)
    assert not c.enabled
    c.put("a", ["x"])
    assert len(c) == 0
    assert c.get("a") is None


def test_clear():
    c = ResultCache(8)
    c.put("a", ["x"])
    c.clear()
    assert len(c) == 0
