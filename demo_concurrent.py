import asyncio
import os
import uuid
from sdk.pyproducts import ProductClient

async def try_create(client, label, name):
    r = await client.create_product_async(name, f"Submitted by {label}.", 99, "Demo", True)
    if r.status_code == 201:
        print(f"✅ {label} created '{name}' (ID: {r.json()['id']})")
    elif r.status_code == 400:
        print(f"❌ {label} rejected: {r.json()['message']}")
    else:
        print(f"⚠️  {label} unexpected response {r.status_code}: {r.text}")
    return r

async def main():
    c = ProductClient(
        base_url=os.environ.get("PRODUCTS_API_URL", "http://127.0.0.1:3000"),
        api_key=os.environ.get("API_KEY", "your-secret-api-key"),
    )

    # Same name, different casing, submitted at once: exactly one may win
    name = f"Limited Edition {uuid.uuid4().hex[:6]}"
    print(f"\n⚡ Racing five creates for '{name}'...")
    results = await asyncio.gather(*[
        try_create(c, f"client-{i}", name.upper() if i % 2 else name)
        for i in range(5)
    ])

    winners = [r.json() for r in results if r.status_code == 201]
    print(f"\n📦 Winners: {len(winners)}")
    for w in winners:
        c.delete_product(w["id"])
    print("🧹 Cleaned up:", c.statistics())

if __name__ == "__main__":
    asyncio.run(main())
