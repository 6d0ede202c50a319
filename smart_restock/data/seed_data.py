#!/usr/bin/env python3
"""
seed_data.py

Generates fake pet-store inventory data to CSVs under a local folder (default: sample_data),
in the layout CsvRestockDataAccess reads.

Entities:
- products, inventory, product_costs, promotions

Run:
  python -m smart_restock.data.seed_data --stores 3 --products 40
"""

from __future__ import annotations
import argparse
import csv
import os
import random
import sys
from datetime import date, datetime, timedelta, timezone
from typing import Dict, List, Optional

from smart_restock.config import get_config

# -----------------------------
# Config & helper structures
# -----------------------------

CATEGORIES = {
    "dog-food": ["brand-barkly", "brand-kibblo", "brand-pawsome"],
    "cat-food": ["brand-whiskerly", "brand-purrfect"],
    "litter": ["brand-cleanpaw", "brand-purrfect"],
    "toys": ["brand-chewco", "brand-pawsome"],
    "grooming": ["brand-fluff", "brand-cleanpaw"],
}

SUPPLIERS = ["supplier-1", "supplier-2", "supplier-3"]

DISCOUNT_TYPES = ["percentage", "percentage", "fixed_amount", "buy_x_get_y", "free_shipping"]


# -----------------------------
# Utility functions
# -----------------------------

def ensure_dir(path: str) -> None:
    if not os.path.exists(path):
        os.makedirs(path, exist_ok=True)

def cost_round(c: float) -> str:
    return f"{max(c, 0.01):.2f}"


# -----------------------------
# Core generators
# -----------------------------

def gen_products(n: int) -> List[Dict]:
    products = []
    categories = list(CATEGORIES.keys())
    for i in range(1, n + 1):
        category = categories[(i - 1) % len(categories)]
        products.append({
            "product_id": f"prod-{i}",
            "name": f"{category.replace('-', ' ').title()} {random.randint(10, 999)}",
            "brand_id": random.choice(CATEGORIES[category]),
            "category_id": f"cat-{category}",
        })
    return products

def gen_inventory(stores: int, products: List[Dict]) -> List[Dict]:
    """One line per store/product. Roughly a quarter of lines are low and a tenth overstocked."""
    rows = []
    for s in range(1, stores + 1):
        for p in products:
            minimum = random.choice([5, 10, 10, 20, 25])
            maximum = minimum * random.choice([5, 10])
            roll = random.random()
            if roll < 0.25:
                current = random.randint(0, minimum)
            elif roll < 0.35:
                current = random.randint(maximum, maximum + minimum)
            else:
                current = random.randint(minimum + 1, maximum - 1)
            reserved = random.randint(0, min(current, 3))
            rows.append({
                "store_id": f"store-{s}",
                "product_id": p["product_id"],
                "variant_id": f"{p['product_id']}-var-1",
                "current_stock": current,
                "minimum_stock": minimum,
                "maximum_stock": maximum,
                "reserved_stock": reserved,
            })
    return rows

def gen_product_costs(products: List[Dict]) -> List[Dict]:
    """Each product is carried by one or two suppliers at slightly different costs."""
    rows = []
    for p in products:
        base = random.uniform(2.0, 60.0)
        for supplier in random.sample(SUPPLIERS, k=random.choice([1, 2])):
            rows.append({
                "product_id": p["product_id"],
                "variant_id": f"{p['product_id']}-var-1",
                "supplier_id": supplier,
                "unit_cost": cost_round(base * random.uniform(0.9, 1.1)),
            })
    return rows

def gen_promotions(products: List[Dict], today: date, n: int = 8) -> List[Dict]:
    promos = []
    for i in range(1, n + 1):
        scope = random.choice(["product", "product", "brand", "category"])
        discount_type = random.choice(DISCOUNT_TYPES)
        target = random.choice(products)
        start = today - timedelta(days=random.randint(0, 30))
        end = start + timedelta(days=random.randint(7, 90))
        value = random.choice([5, 10, 15, 20]) if discount_type == "percentage" else random.choice([0, 5, 25])
        promos.append({
            "id": f"promo-{i}",
            "supplier_id": random.choice(SUPPLIERS),
            "name": f"Promotion {i}",
            "scope": scope,
            "discount_type": discount_type,
            "discount_value": value,
            "minimum_quantity": random.choice([1, 1, 5, 10]),
            "start_date": start.isoformat(),
            "end_date": end.isoformat(),
            "max_usage": random.choice(["", 100, 500]),
            "current_usage": random.randint(0, 50),
            "product_id": target["product_id"] if scope == "product" else "",
            "variant_id": "",
            "brand_id": target["brand_id"] if scope == "brand" else "",
            "category_id": target["category_id"] if scope == "category" else "",
        })
    return promos


# -----------------------------
# CSV writer
# -----------------------------

def write_csv(path: str, rows: List[Dict], headers: List[str]) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=headers)
        w.writeheader()
        for r in rows:
            w.writerow(r)


# -----------------------------
# Main
# -----------------------------

def main(argv: Optional[List[str]] = None) -> int:
    config = get_config()

    parser = argparse.ArgumentParser(description="Generate fake store inventory data to CSVs.")
    parser.add_argument("--stores", type=int, default=config.default_seed_stores)
    parser.add_argument("--products", type=int, default=config.default_seed_products)
    parser.add_argument("--output-dir", type=str, default=config.data_dir)
    parser.add_argument("--seed", type=int, default=config.default_seed_value)
    parser.add_argument("--no-overwrite", action="store_true", help="Fail if CSVs already exist.")
    args = parser.parse_args(argv)

    random.seed(args.seed)

    outdir = args.output_dir
    ensure_dir(outdir)

    files = {
        "products": os.path.join(outdir, "products.csv"),
        "inventory": os.path.join(outdir, "inventory.csv"),
        "product_costs": os.path.join(outdir, "product_costs.csv"),
        "promotions": os.path.join(outdir, "promotions.csv"),
    }
    if args.no_overwrite:
        for p in files.values():
            if os.path.exists(p):
                print(f"Refusing to overwrite existing file: {p}", file=sys.stderr)
                return 2

    today = datetime.now(timezone.utc).date()

    products = gen_products(args.products)
    inventory = gen_inventory(args.stores, products)
    costs = gen_product_costs(products)
    promotions = gen_promotions(products, today)

    write_csv(files["products"], products,
              ["product_id", "name", "brand_id", "category_id"])
    write_csv(files["inventory"], inventory,
              ["store_id", "product_id", "variant_id", "current_stock", "minimum_stock",
               "maximum_stock", "reserved_stock"])
    write_csv(files["product_costs"], costs,
              ["product_id", "variant_id", "supplier_id", "unit_cost"])
    write_csv(files["promotions"], promotions,
              ["id", "supplier_id", "name", "scope", "discount_type", "discount_value",
               "minimum_quantity", "start_date", "end_date", "max_usage", "current_usage",
               "product_id", "variant_id", "brand_id", "category_id"])

    print(f"Generated data in {outdir}")
    print(f" products: {len(products)} | inventory lines: {len(inventory)}")
    print(f" product costs: {len(costs)} | promotions: {len(promotions)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
