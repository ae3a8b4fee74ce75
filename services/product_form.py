# services/product_form.py

from __future__ import annotations

import logging
import math
import re
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional

from models.product import Product, PRODUCT_CATEGORIES

logger = logging.getLogger("inventory.form")

CLOSED = "closed"
ADD = "add"
EDIT = "edit"

# plain decimal numbers only: "12", "-3", "4.50", ".5", "1e3"
NUMBER_RE = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


@dataclass
class ProductDraft:
    # Raw user input, everything kept as the string typed into the form.
    name: str = ""
    sku: str = ""
    price: str = ""
    quantity: str = ""
    category: str = ""

    @classmethod
    def from_product(cls, product: Product) -> "ProductDraft":
        return cls(
            name=product.name,
            sku=product.sku,
            price=str(product.price),
            quantity=str(product.quantity),
            category=product.category,
        )


def generate_id() -> str:
    # short opaque id, practically unique
    return uuid.uuid4().hex[:12]


def _parse_number(text: str) -> Optional[float]:
    # float() alone would also take "1_000", "nan" and "inf"
    if not NUMBER_RE.fullmatch(text):
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return value


def validate_draft(draft: ProductDraft, store, edit_id: Optional[str] = None) -> Dict[str, str]:
    """
    Check every field of the draft and return {field: message}.
    All fields are checked, an empty dict means the draft is valid.
    """
    errors: Dict[str, str] = {}

    if not draft.name.strip():
        errors["name"] = "Name is required"

    sku = draft.sku.strip()
    if not sku:
        errors["sku"] = "SKU is required"
    elif store.sku_exists(sku, except_id=edit_id):
        errors["sku"] = "SKU must be unique"

    price_text = draft.price.strip()
    if not price_text:
        errors["price"] = "Price is required"
    else:
        price = _parse_number(price_text)
        # checked on the stored (rounded) value so "0.001" can't become 0.00
        if price is None or round(price, 2) <= 0:
            errors["price"] = "Price must be a number > 0"

    qty_text = draft.quantity.strip()
    if not qty_text:
        errors["quantity"] = "Quantity is required"
    else:
        qty = _parse_number(qty_text)
        if qty is None or not qty.is_integer() or qty < 0:
            errors["quantity"] = "Quantity must be an integer >= 0"

    category = draft.category.strip()
    if not category:
        errors["category"] = "Category is required"
    elif category not in PRODUCT_CATEGORIES:
        errors["category"] = "Category must be one of the listed categories"

    return errors


def build_product(draft: ProductDraft, product_id: str) -> Product:
    # Only call this on a draft that passed validate_draft().
    return Product(
        id=product_id,
        name=draft.name.strip(),
        sku=draft.sku.strip(),
        price=round(float(draft.price.strip()), 2),
        quantity=int(float(draft.quantity.strip())),
        category=draft.category.strip(),
    )


@dataclass
class ProductForm:
    """
    Add / edit form state.

    closed -> open_add() / open_edit() -> submit() succeeds -> closed
                                        -> submit() fails   -> stays open with errors
    cancel() always goes back to closed and drops the draft.
    """

    store: object
    mode: str = CLOSED
    draft: Optional[ProductDraft] = None
    edit_id: Optional[str] = None
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def is_open(self) -> bool:
        return self.mode != CLOSED

    def open_add(self) -> ProductDraft:
        self.mode = ADD
        self.draft = ProductDraft()
        self.edit_id = None
        self.errors = {}
        return self.draft

    def open_edit(self, product_id: str) -> ProductDraft:
        product = self.store.get(product_id)
        if product is None:
            raise KeyError(f"Product not found: {product_id}")
        self.mode = EDIT
        self.draft = ProductDraft.from_product(product)
        self.edit_id = product.id
        self.errors = {}
        return self.draft

    def cancel(self) -> None:
        self.mode = CLOSED
        self.draft = None
        self.edit_id = None
        self.errors = {}

    def submit(self) -> Optional[Product]:
        # Returns the saved product, or None when validation failed.
        if not self.is_open:
            raise ValueError("Form is not open")

        self.errors = validate_draft(self.draft, self.store, edit_id=self.edit_id)
        if self.errors:
            logger.info(f"Form rejected ({self.mode}): {self.errors}")
            return None

        product_id = self.edit_id if self.mode == EDIT else generate_id()
        product = build_product(self.draft, product_id)
        self.store.upsert(product)
        self.cancel()
        return product
