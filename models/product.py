# models/product.py
from dataclasses import dataclass, asdict

# Filter choices shown in the GUI. "All" is only a filter value, never a product category.
CATEGORIES = ["All", "electronics", "furniture", "stationery", "Clothing", "Home", "Books", "Accessories"]
PRODUCT_CATEGORIES = CATEGORIES[1:]

IN_STOCK = "In Stock"
LOW_STOCK = "Low Stock"
OUT_OF_STOCK = "Out of Stock"
STATUS_OPTIONS = ["All", IN_STOCK, LOW_STOCK, OUT_OF_STOCK]

# quantities 1..LOW_STOCK_MAX count as low stock
LOW_STOCK_MAX = 10


def get_status(quantity: int) -> str:
    # Stock status is derived from quantity only, never stored.
    if quantity <= 0:
        return OUT_OF_STOCK
    if quantity <= LOW_STOCK_MAX:
        return LOW_STOCK
    return IN_STOCK


# Product model representing one inventory record.
@dataclass
class Product:
    id: str
    name: str
    sku: str
    price: float
    quantity: int
    category: str

    @property
    def status(self) -> str:
        return get_status(self.quantity)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Product":
        # Raises KeyError / TypeError / ValueError on a malformed record.
        if not isinstance(data, dict):
            raise TypeError(f"Product record must be an object, got {type(data).__name__}")
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            sku=str(data["sku"]),
            price=float(data["price"]),
            quantity=int(data["quantity"]),
            category=str(data["category"]),
        )
