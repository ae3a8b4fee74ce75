# services/product_store.py
import json
import logging

from models.product import Product

logger = logging.getLogger("inventory.store")

STORAGE_KEY = "products_v1"

# Seeded on first start, when nothing has been stored under STORAGE_KEY yet.
DEMO_PRODUCTS = [
    Product(id="p1", name="Wireless Mouse", sku="ELC-001", price=24.99, quantity=35, category="electronics"),
    Product(id="p2", name="Office Chair", sku="FRN-002", price=149.00, quantity=8, category="furniture"),
    Product(id="p3", name="Notebook A5", sku="STN-003", price=3.50, quantity=0, category="stationery"),
    Product(id="p4", name="Cotton T-Shirt", sku="CLT-004", price=12.00, quantity=50, category="Clothing"),
    Product(id="p5", name="Ceramic Mug", sku="HOM-005", price=7.25, quantity=4, category="Home"),
    Product(id="p6", name="Desk Lamp", sku="LMP-007", price=29.99, quantity=15, category="Home"),
]


class ProductStore:
    # Single source of truth for the product list.
    # Every mutation is written through to the repository immediately.

    def __init__(self, repo, key: str = STORAGE_KEY):
        self.repo = repo
        self.key = key
        self._products: list[Product] = []

    @property
    def products(self) -> list[Product]:
        # Raw storage order (most recently added first). Callers get a copy.
        return list(self._products)

    def __len__(self) -> int:
        return len(self._products)

    def get(self, product_id: str) -> Product | None:
        for p in self._products:
            if p.id == product_id:
                return p
        return None

    def load(self) -> list[Product]:
        if not self.repo.has_key(self.key):
            # first run -> seed the demo set and persist it right away
            self.save([Product(**p.to_dict()) for p in DEMO_PRODUCTS])
            logger.info(f"No stored products under '{self.key}', seeded {len(self._products)} demo products")
            return self.products

        try:
            raw = self.repo.get_item(self.key)
            data = json.loads(raw)
            if not isinstance(data, list):
                raise TypeError(f"expected a list of products, got {type(data).__name__}")
            self._products = [Product.from_dict(item) for item in data]
        except (ValueError, KeyError, TypeError):
            # unreadable or corrupt value: report it and keep whatever we had (empty at startup)
            logger.exception(f"Failed to parse stored products under '{self.key}'")
        else:
            logger.info(f"Loaded {len(self._products)} products from '{self.key}'")
        return self.products

    def save(self, products: list[Product]) -> None:
        # Whole-list overwrite, never a partial write.
        # memory is only updated after the write succeeded
        products = list(products)
        payload = json.dumps([p.to_dict() for p in products], indent=2, ensure_ascii=False)
        self.repo.set_item(self.key, payload)
        self._products = products

    def upsert(self, product: Product) -> None:
        products = self.products
        for i, p in enumerate(products):
            if p.id == product.id:
                products[i] = product
                logger.info(f"Updated product {product.id} ({product.sku})")
                break
        else:
            products.insert(0, product)
            logger.info(f"Added product {product.id} ({product.sku})")
        self.save(products)

    def remove(self, product_id: str) -> bool:
        products = [p for p in self._products if p.id != product_id]
        if len(products) == len(self._products):
            return False
        self.save(products)
        logger.info(f"Removed product {product_id}")
        return True

    def sku_exists(self, sku: str, except_id: str | None = None) -> bool:
        wanted = sku.strip().lower()
        for p in self._products:
            if p.id == except_id:
                continue
            if p.sku.strip().lower() == wanted:
                return True
        return False
