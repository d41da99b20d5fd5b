#!/usr/bin/env python
import os
from sdk.pyproducts import ProductClient, ClientError

def main():
    c = ProductClient(
        base_url=os.environ.get("PRODUCTS_API_URL", "http://127.0.0.1:3000"),
        api_key=os.environ.get("API_KEY", "your-secret-api-key"),
    )

    # -----------------------------
    # Browse the seeded catalogue
    # -----------------------------
    print("Listing products...")
    print(c.list_products())

    print("\nElectronics only (category match ignores case)...")
    print(c.list_products(category="electronics"))

    print("\nSearching for 'mouse'...")
    print(c.list_products(search="mouse"))

    print("\nSecond page, two per page...")
    print(c.list_products(page=2, limit=2))

    # -----------------------------
    # Create / update / delete
    # -----------------------------
    print("\nCreating a product...")
    webcam = c.create_product("Webcam HD", "1080p webcam with privacy shutter.", 60, "Electronics", True)
    print(webcam)

    print("\nCreating it again (duplicate name, any case)...")
    try:
        c.create_product("WEBCAM hd", "Same name, different case.", 65, "Electronics", True)
    except ClientError as e:
        print(e)

    print("\nMarking it out of stock...")
    print(c.update_product(webcam["id"], "Webcam HD", "1080p webcam with privacy shutter.", 60, "Electronics", False))

    print("\nStatistics...")
    print(c.statistics())

    print("\nDeleting it...")
    c.delete_product(webcam["id"])
    try:
        c.get_product(webcam["id"])
    except ClientError as e:
        print(e)

if __name__ == "__main__":
    main()
