# services/filter_service.py
"""
filter_service.py

Derives the displayed product list from the store contents and the
current search / category / status inputs.

Rules:
- search text matches name OR sku, case-insensitive substring
- "All" disables the category or status filter
- result is sorted by name, reverse alphabetical (Z before A)

Nothing here mutates its inputs.
"""

import locale
import unicodedata
from typing import List

from models.product import Product


def matches_search(product: Product, search_text: str) -> bool:
    needle = search_text.strip().lower()
    if not needle:
        return True
    return needle in product.name.lower() or needle in product.sku.lower()


def matches_category(product: Product, category_filter: str) -> bool:
    return category_filter == "All" or product.category == category_filter


def matches_status(product: Product, status_filter: str) -> bool:
    return status_filter == "All" or product.status == status_filter


def _fold(text: str) -> str:
    # "Éclair" -> "eclair"
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()


def name_sort_key(product: Product):
    # Accent/case-folded name first, collated with the process locale (gui.main sets LC_COLLATE).
    # Raw name breaks ties.
    return (locale.strxfrm(_fold(product.name)), locale.strxfrm(product.name))


def project(
    products: List[Product],
    search_text: str = "",
    category_filter: str = "All",
    status_filter: str = "All",
) -> List[Product]:
    visible = [
        p for p in products
        if matches_search(p, search_text)
        and matches_category(p, category_filter)
        and matches_status(p, status_filter)
    ]
    # sorted() returns a new list, the store order is left untouched
    return sorted(visible, key=name_sort_key, reverse=True)
