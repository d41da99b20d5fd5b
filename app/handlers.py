# app/handlers.py
import logging
import math
from collections import Counter
from typing import Any, Dict, Optional

from .core import DEFAULT_LIMIT, DEFAULT_PAGE, _make_product, parse_positive_int, validate_product
from .database import ProductStore, new_product_id
from .errors import DuplicateProductError, ProductNotFoundError
from .models import Product, ProductPage, ProductStatistics

# This file contains the logic behind every product endpoint.
# Handlers raise typed errors and never catch them; app.errors translates.

logger = logging.getLogger(__name__)


# ---------------------------
# Reads
# ---------------------------
def list_products_logic(
    store: ProductStore,
    category: Optional[str] = None,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    max_limit: Optional[int] = None,
) -> ProductPage:
    page_no = parse_positive_int(page, "page", DEFAULT_PAGE)
    per_page = parse_positive_int(limit, "limit", DEFAULT_LIMIT, maximum=max_limit)

    products = store.list()
    if category:
        wanted = category.lower()
        products = [p for p in products if p.category.lower() == wanted]
    if search:
        term = search.lower()
        products = [p for p in products if term in p.name.lower()]

    total = len(products)
    start = (page_no - 1) * per_page
    return ProductPage(
        products=products[start:start + per_page],
        totalProducts=total,
        totalPages=math.ceil(total / per_page),
        currentPage=page_no,
        itemsPerPage=per_page,
    )


def get_product_logic(store: ProductStore, product_id: str) -> Product:
    p = store.find_by_id(product_id)
    if p is None:
        raise ProductNotFoundError(product_id)
    return p


def statistics_logic(store: ProductStore) -> ProductStatistics:
    products = store.list()
    in_stock = sum(1 for p in products if p.inStock)
    return ProductStatistics(
        totalProducts=len(products),
        productsByCategory=dict(Counter(p.category for p in products)),
        inStockCount=in_stock,
        outOfStockCount=len(products) - in_stock,
    )


# ---------------------------
# Writes
# ---------------------------
def create_product_logic(store: ProductStore, payload: Dict[str, Any]) -> Product:
    validate_product(payload)
    with store.lock:
        if store.exists_by_name(payload["name"]):
            raise DuplicateProductError(payload["name"])
        product = _make_product(new_product_id(), payload)
        store.insert(product)
    logger.info("Created product %s (%s)", product.id, product.name)
    return product


def update_product_logic(store: ProductStore, product_id: str, payload: Dict[str, Any]) -> Product:
    validate_product(payload)
    with store.lock:
        index = store.find_index_by_id(product_id)
        if index is None:
            raise ProductNotFoundError(product_id)
        if store.exists_by_name(payload["name"], exclude_id=product_id):
            raise DuplicateProductError(payload["name"])
        # id always comes from the path
        product = _make_product(product_id, payload)
        store.replace_at(index, product)
    logger.info("Updated product %s", product_id)
    return product


def delete_product_logic(store: ProductStore, product_id: str) -> None:
    if not store.remove_by_id(product_id):
        raise ProductNotFoundError(product_id)
    logger.info("Deleted product %s", product_id)
