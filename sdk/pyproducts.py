# sdk/pyproducts.py
import requests
import httpx
from typing import Any, Dict, Optional
from rich import print

API_KEY_HEADER = "X-API-Key"


class ClientError(Exception):
    """Non-2xx answer from the API, carrying its `{status, name, message}` body."""

    def __init__(self, status_code: int, name: str, message: str):
        super().__init__(f"HTTP {status_code} {name}: {message}")
        self.status_code = status_code
        self.name = name
        self.message = message


def _check(r) -> Any:
    if r.status_code >= 400:
        try:
            body = r.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        raise ClientError(r.status_code, body.get("name", "HTTPError"), body.get("message", r.text))
    if r.status_code == 204:
        return None
    return r.json()


class ProductClient:
    def __init__(self, base_url: str = "http://localhost:3000", api_key: Optional[str] = None,
                 timeout: int = 10, session=None, api_prefix: str = "/api"):
        self.base_url = base_url.rstrip("/")
        self.products_url = f"{self.base_url}{api_prefix}/products"
        # anything with requests' Session interface, e.g. a starlette TestClient
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.api_key = api_key
        if api_key:
            self.session.headers.update({API_KEY_HEADER: api_key})

    @staticmethod
    def _product_payload(name: str, description: str, price: float, category: str, in_stock: bool) -> Dict[str, Any]:
        return {"name": name, "description": description, "price": price,
                "category": category, "inStock": in_stock}

    # Products
    def list_products(self, category: Optional[str] = None, search: Optional[str] = None,
                      page: Optional[int] = None, limit: Optional[int] = None):
        params = {}
        if category:
            params["category"] = category
        if search:
            params["search"] = search
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        r = self.session.get(self.products_url, params=params, timeout=self.timeout)
        return _check(r)

    def get_product(self, product_id: str):
        r = self.session.get(f"{self.products_url}/{product_id}", timeout=self.timeout)
        return _check(r)

    def create_product(self, name: str, description: str, price: float, category: str, in_stock: bool = True):
        payload = self._product_payload(name, description, price, category, in_stock)
        r = self.session.post(self.products_url, json=payload, timeout=self.timeout)
        return _check(r)

    def update_product(self, product_id: str, name: str, description: str, price: float,
                       category: str, in_stock: bool):
        payload = self._product_payload(name, description, price, category, in_stock)
        r = self.session.put(f"{self.products_url}/{product_id}", json=payload, timeout=self.timeout)
        return _check(r)

    def delete_product(self, product_id: str):
        r = self.session.delete(f"{self.products_url}/{product_id}", timeout=self.timeout)
        return _check(r)

    def statistics(self):
        r = self.session.get(f"{self.products_url}/statistics", timeout=self.timeout)
        return _check(r)

    # Async create (used by the concurrency demo)
    async def create_product_async(self, name: str, description: str, price: float, category: str,
                                   in_stock: bool = True, client: Optional[httpx.AsyncClient] = None):
        payload = self._product_payload(name, description, price, category, in_stock)
        headers = {API_KEY_HEADER: self.api_key} if self.api_key else {}
        if client is not None:
            r = await client.post(self.products_url, json=payload, headers=headers)
            return r
        async with httpx.AsyncClient(timeout=self.timeout) as ac:
            r = await ac.post(self.products_url, json=payload, headers=headers)
            return r


if __name__ == "__main__":
    import argparse
    import os

    parser = argparse.ArgumentParser(description="Product API command line")
    parser.add_argument("--base-url", default=os.environ.get("PRODUCTS_API_URL", "http://127.0.0.1:3000"))
    parser.add_argument("--api-key", default=os.environ.get("API_KEY", "your-secret-api-key"))
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list-products", help="List products")
    lp.add_argument("--category", help="Filter by category (case-insensitive)")
    lp.add_argument("--search", help="Substring of the product name")
    lp.add_argument("--page", type=int)
    lp.add_argument("--limit", type=int)

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True)

    for cmd, help_text in (("create-product", "Create a product"), ("update-product", "Replace a product")):
        sp = subparsers.add_parser(cmd, help=help_text)
        if cmd == "update-product":
            sp.add_argument("--product-id", required=True)
        sp.add_argument("--name", required=True)
        sp.add_argument("--description", required=True)
        sp.add_argument("--price", type=float, required=True)
        sp.add_argument("--category", required=True)
        sp.add_argument("--out-of-stock", action="store_true", help="Mark as not in stock")

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", required=True)

    subparsers.add_parser("statistics", help="Show catalogue statistics")

    args = parser.parse_args()
    c = ProductClient(base_url=args.base_url, api_key=args.api_key)

    try:
        if args.command == "list-products":
            print(c.list_products(args.category, args.search, args.page, args.limit))
        elif args.command == "get-product":
            print(c.get_product(args.product_id))
        elif args.command == "create-product":
            print(c.create_product(args.name, args.description, args.price, args.category, not args.out_of_stock))
        elif args.command == "update-product":
            print(c.update_product(args.product_id, args.name, args.description, args.price,
                                   args.category, not args.out_of_stock))
        elif args.command == "delete-product":
            c.delete_product(args.product_id)
            print(f"[green]Deleted {args.product_id}[/green]")
        elif args.command == "statistics":
            print(c.statistics())
    except ClientError as e:
        print(f"[red]{e}[/red]")
        raise SystemExit(1)
