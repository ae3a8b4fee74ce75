# services/report_service.py
from collections import Counter

from models.product import Product, IN_STOCK, LOW_STOCK, OUT_OF_STOCK

# report_service.py builds the stock summary shown under the product table.
class ReportService:

    def status_summary(self, products: list[Product]) -> dict:
        # Count products per derived stock status and total up the stock on hand.
        counter = Counter(p.status for p in products)
        total_value = sum(p.price * p.quantity for p in products)
        return {
            "products": len(products),
            "units": sum(p.quantity for p in products),
            "value": round(total_value, 2),
            IN_STOCK: counter[IN_STOCK],
            LOW_STOCK: counter[LOW_STOCK],
            OUT_OF_STOCK: counter[OUT_OF_STOCK],
        }

    def low_stock(self, products: list[Product]) -> list[Product]:
        # Alert for products that need restocking, emptiest first.
        alerts = [p for p in products if p.status in (LOW_STOCK, OUT_OF_STOCK)]
        return sorted(alerts, key=lambda p: p.quantity)
