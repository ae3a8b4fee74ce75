# services/inventory_service.py
import logging
from typing import Callable

from models.product import Product, CATEGORIES, STATUS_OPTIONS
from services.filter_service import project
from services.product_form import ProductForm

logger = logging.getLogger("inventory.service")


class InventoryService:
    # Ties the store, the add/edit form and the filter inputs together.
    # The projection in self.visible is recomputed after every input change or mutation.

    def __init__(self, store):
        self.store = store
        self.form = ProductForm(store)
        self.search_text = ""
        self.category_filter = "All"
        self.status_filter = "All"
        self.visible: list[Product] = []
        self.refresh()

    def refresh(self) -> list[Product]:
        self.visible = project(
            self.store.products,
            self.search_text,
            self.category_filter,
            self.status_filter,
        )
        return self.visible

    # filter inputs

    def set_search_text(self, text: str) -> list[Product]:
        self.search_text = text
        return self.refresh()

    def set_category_filter(self, category: str) -> list[Product]:
        if category not in CATEGORIES:
            raise ValueError(f"Unknown category filter: {category}")
        self.category_filter = category
        return self.refresh()

    def set_status_filter(self, status: str) -> list[Product]:
        if status not in STATUS_OPTIONS:
            raise ValueError(f"Unknown status filter: {status}")
        self.status_filter = status
        return self.refresh()

    # mutations

    def submit_form(self) -> Product | None:
        product = self.form.submit()
        if product is not None:
            self.refresh()
        return product

    def delete_product(self, product_id: str, confirm: Callable[[Product], bool]) -> bool:
        # confirm() is a blocking yes/no prompt; saying no leaves everything as it was.
        product = self.store.get(product_id)
        if product is None:
            return False
        if not confirm(product):
            logger.info(f"Delete of {product_id} cancelled by user")
            return False
        removed = self.store.remove(product_id)
        self.refresh()
        return removed
