# app/database.py
import threading
import uuid
from typing import List, Optional

from .models import Product

# This file holds the in-memory product collection and its lock.
# The store trusts its caller: nothing here validates.

SEED_PRODUCTS = [
    {
        "name": "Laptop Pro X",
        "description": "Powerful laptop for professionals with 16GB RAM and 512GB SSD.",
        "price": 1200,
        "category": "Electronics",
        "inStock": True,
    },
    {
        "name": "Wireless Mouse Ergo",
        "description": "Ergonomic wireless mouse with adjustable DPI.",
        "price": 25,
        "category": "Electronics",
        "inStock": True,
    },
    {
        "name": "Mechanical Keyboard RGB",
        "description": "Gaming mechanical keyboard with customizable RGB lighting.",
        "price": 80,
        "category": "Electronics",
        "inStock": False,
    },
    {
        "name": "Desk Lamp LED",
        "description": "Modern LED desk lamp with touch control and dimming.",
        "price": 45,
        "category": "Home & Office",
        "inStock": True,
    },
    {
        "name": "Smartwatch Sport",
        "description": "Fitness smartwatch with heart rate monitoring and GPS.",
        "price": 150,
        "category": "Wearables",
        "inStock": True,
    },
]


def new_product_id() -> str:
    return str(uuid.uuid4())


class ProductStore:
    """Insertion-ordered collection of products.

    `lock` is re-entrant so handlers can hold it across a check-then-act
    sequence while the individual methods below take it again.
    """

    def __init__(self, products: Optional[List[Product]] = None):
        self.lock = threading.RLock()
        self._products: List[Product] = list(products or [])

    @classmethod
    def seeded(cls) -> "ProductStore":
        return cls([Product(id=new_product_id(), **fields) for fields in SEED_PRODUCTS])

    def __len__(self) -> int:
        return len(self._products)

    def list(self) -> List[Product]:
        # snapshot; records themselves are immutable
        with self.lock:
            return list(self._products)

    def find_by_id(self, product_id: str) -> Optional[Product]:
        with self.lock:
            for p in self._products:
                if p.id == product_id:
                    return p
        return None

    def find_index_by_id(self, product_id: str) -> Optional[int]:
        with self.lock:
            for i, p in enumerate(self._products):
                if p.id == product_id:
                    return i
        return None

    def exists_by_name(self, name: str, exclude_id: Optional[str] = None) -> bool:
        lowered = name.lower()
        with self.lock:
            return any(
                p.name.lower() == lowered and p.id != exclude_id
                for p in self._products
            )

    def insert(self, product: Product) -> None:
        with self.lock:
            self._products.append(product)

    def replace_at(self, index: int, product: Product) -> None:
        with self.lock:
            self._products[index] = product

    def remove_by_id(self, product_id: str) -> bool:
        with self.lock:
            index = self.find_index_by_id(product_id)
            if index is None:
                return False
            del self._products[index]
            return True
