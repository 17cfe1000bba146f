import pytest

WEIGHTS = {"A": 10, "B": 20, "C": 20, "D": 10, "E": 15}


@pytest.fixture
def weights():
    return dict(WEIGHTS)


@pytest.fixture(scope="module")
def keys():
    return [f"key:{i}" for i in range(1, 10001)]
