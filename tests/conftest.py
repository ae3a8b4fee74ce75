# tests/conftest.py
from pathlib import Path

import pytest

from data.repository import DataRepository
from services.inventory_service import InventoryService
from services.product_store import ProductStore


@pytest.fixture
def repo(tmp_path: Path) -> DataRepository:
    return DataRepository(storage_dir=tmp_path / "storage")


@pytest.fixture
def store(repo: DataRepository) -> ProductStore:
    # Fresh storage, so load() seeds the demo products.
    s = ProductStore(repo)
    s.load()
    return s


@pytest.fixture
def service(store: ProductStore) -> InventoryService:
    return InventoryService(store)
