# app/models.py
from pydantic import BaseModel, ConfigDict
from typing import Dict, List, Union

class Product(BaseModel):
    # stored records are replaced, never edited in place
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    price: Union[int, float]
    category: str
    inStock: bool

class ProductPage(BaseModel):
    products: List[Product]
    totalProducts: int
    totalPages: int
    currentPage: int
    itemsPerPage: int

class ProductStatistics(BaseModel):
    totalProducts: int
    productsByCategory: Dict[str, int]
    inStockCount: int
    outOfStockCount: int
