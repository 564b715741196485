import pytest

from vdf_beacon.constants import REFERENCE_MODULUS_HEX
from vdf_beacon.vdf.params import DEVNET

# (2^61 - 1) * (2^89 - 1): product of two Mersenne primes, small enough for
# fast round trips in unit tests.
SMALL_MODULUS = (2**61 - 1) * (2**89 - 1)


def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        "slow: full-size reference runs (2^20 squarings) and timing checks",
    )


@pytest.fixture(scope="session")
def small_modulus() -> int:
    return SMALL_MODULUS


@pytest.fixture(scope="session")
def reference_modulus() -> int:
    return int(REFERENCE_MODULUS_HEX, 16)


@pytest.fixture(scope="session")
def devnet_params():
    return DEVNET


@pytest.fixture
def clean_vdf_env(monkeypatch):
    """Drop any VDF_* overrides inherited from the developer's shell."""
    import os

    for key in list(os.environ):
        if key.startswith("VDF_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch
