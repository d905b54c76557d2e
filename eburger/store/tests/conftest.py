import pytest

from eburger.config import set_config_for_test
from eburger.data.backends.memory_backend import MemoryPersistence
from eburger.data.models import Product
from eburger.errors import PersistenceError


class FlakyPersistence(MemoryPersistence):
    """Memory backend whose saves can be switched to fail."""

    def __init__(self) -> None:
        super().__init__()
        self.fail_saves = False

    def save(self, key: str, blob: str) -> None:
        if self.fail_saves:
            raise PersistenceError(f"Changes not saved for {key}")
        super().save(key, blob)


@pytest.fixture(autouse=True)
def test_config():
    set_config_for_test(persistence_backend="memory", log_level="DEBUG")


@pytest.fixture
def persistence():
    return FlakyPersistence()


@pytest.fixture
def burger():
    return Product(id="1", name="Classic Cheeseburger", price="12.50", category="Beef")


@pytest.fixture
def chicken():
    return Product(id="2", name="Spicy Chicken Deluxe", price="14.00", category="Chicken")
