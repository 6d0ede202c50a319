from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar

import pandas as pd
from pydantic import BaseModel, ValidationError

from smart_restock.config import get_config
from smart_restock.engine.errors import InvalidInputError
from smart_restock.logging import get_logger
from ..interface import RestockDataAccess
from ..models import (
    InventoryFilters, PromotionFilters, InventoryLine, Promotion, ProductCost,
)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Identifiers and money stay strings on load so ids are not coerced to ints
# and costs keep their exact decimal text.
_STRING_COLUMNS = {
    "inventory.csv": ["store_id", "product_id", "variant_id"],
    "products.csv": ["product_id", "brand_id", "category_id"],
    "product_costs.csv": ["product_id", "variant_id", "supplier_id", "unit_cost"],
    "promotions.csv": [
        "id", "supplier_id", "name", "scope", "discount_type", "discount_value",
        "start_date", "end_date", "product_id", "variant_id", "brand_id", "category_id",
    ],
}


@dataclass
class _Tables:
    inventory: pd.DataFrame
    products: pd.DataFrame
    product_costs: pd.DataFrame
    promotions: pd.DataFrame
    # Inventory joined with product brand/category to avoid re-joining every call
    lines: pd.DataFrame


def _records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """DataFrame rows as dicts with NaN replaced by None."""
    if df.empty:
        return []
    return df.astype(object).where(pd.notna(df), None).to_dict("records")


def _to_models(df: pd.DataFrame, model: Type[ModelT], source: str) -> List[ModelT]:
    out = []
    for i, row in enumerate(_records(df)):
        try:
            out.append(model(**{k: v for k, v in row.items() if v is not None}))
        except ValidationError as e:
            raise InvalidInputError(f"Invalid row {i} in {source}: {e}") from e
    return out


def _resolve_data_dir(data_dir: Path) -> Path:
    """Anchor a relative data_dir at the nearest pyproject.toml above the cwd, else the cwd."""
    if data_dir.is_absolute():
        return data_dir
    cwd = Path.cwd()
    anchor = next((d for d in (cwd, *cwd.parents) if (d / "pyproject.toml").exists()), cwd)
    return anchor / data_dir


class CsvRestockDataAccess(RestockDataAccess):
    """RestockDataAccess over a folder of CSV exports.

    The folder is read once when the object is built; each query filters the
    cached frames and returns fresh model instances.
    """

    def __init__(self, data_dir: str | Path = None) -> None:
        if data_dir is None:
            config = get_config()
            data_dir = config.data_dir

        self.data_dir = _resolve_data_dir(Path(data_dir))
        self.logger = get_logger(__name__)

        self._tables = self._load_tables(self.data_dir)
        self.logger.info(
            f"Loaded {len(self._tables.inventory)} inventory rows and "
            f"{len(self._tables.promotions)} promotions from {self.data_dir}"
        )

    # ---------- loading / join helpers ----------

    @staticmethod
    def _read(data_dir: Path, name: str) -> pd.DataFrame:
        return pd.read_csv(data_dir / name, dtype={c: str for c in _STRING_COLUMNS[name]})

    @staticmethod
    def _load_tables(data_dir: Path) -> _Tables:
        if not data_dir.exists():
            raise FileNotFoundError(
                f"Data directory not found: {data_dir}\n"
                f"Please either:\n"
                f"  1. Generate sample data: python -m smart_restock.data.seed_data\n"
                f"  2. Set DATA_DIR environment variable to point to your data directory\n"
                f"  3. Create a .env file with DATA_DIR=/path/to/your/data"
            )

        required_files = ["inventory.csv"]
        missing_files = [f for f in required_files if not (data_dir / f).exists()]
        if missing_files:
            raise FileNotFoundError(
                f"Required CSV files missing in {data_dir}:\n"
                f"  Missing: {', '.join(missing_files)}\n"
                f"  Expected files: {', '.join(required_files)}"
            )

        try:
            inventory = CsvRestockDataAccess._read(data_dir, "inventory.csv")

            # Optional tables
            products = pd.DataFrame(columns=["product_id", "brand_id", "category_id"])
            product_costs = pd.DataFrame(columns=["product_id", "variant_id", "supplier_id", "unit_cost"])
            promotions = pd.DataFrame()

            if (data_dir / "products.csv").exists():
                products = CsvRestockDataAccess._read(data_dir, "products.csv")
            if (data_dir / "product_costs.csv").exists():
                product_costs = CsvRestockDataAccess._read(data_dir, "product_costs.csv")
            if (data_dir / "promotions.csv").exists():
                promotions = CsvRestockDataAccess._read(data_dir, "promotions.csv")
        except Exception as e:
            raise RuntimeError(
                f"Error reading CSV files from {data_dir}: {e}\n"
                f"Please check that the CSV files are valid and readable."
            ) from e

        lines = CsvRestockDataAccess._build_lines(inventory, products)

        return _Tables(
            inventory=inventory,
            products=products,
            product_costs=product_costs,
            promotions=promotions,
            lines=lines,
        )

    @staticmethod
    def _build_lines(inventory: pd.DataFrame, products: pd.DataFrame) -> pd.DataFrame:
        catalog_cols = [c for c in ("product_id", "brand_id", "category_id") if c in products.columns]
        df = inventory
        if "product_id" in catalog_cols and len(catalog_cols) > 1:
            # Catalog attributes win over any copied onto the inventory rows
            df = df.drop(columns=catalog_cols[1:], errors="ignore").merge(
                products[catalog_cols].drop_duplicates("product_id"),
                on="product_id",
                how="left",
            )
        return df.copy()

    # ---------- interface implementation ----------

    def get_inventory(self, filters: InventoryFilters) -> List[InventoryLine]:
        df = self._tables.lines
        df = df[df["store_id"] == filters.store_id]

        if filters.supplier_id:
            costs = self._tables.product_costs
            carried = costs[costs["supplier_id"] == filters.supplier_id]["product_id"]
            df = df[df["product_id"].isin(carried)]
        if filters.product_id:
            if isinstance(filters.product_id, str):
                df = df[df["product_id"] == filters.product_id]
            else:
                df = df[df["product_id"].isin(filters.product_id)]
        if filters.low_stock_only:
            df = df[df["current_stock"] <= df["minimum_stock"]]

        return _to_models(df, InventoryLine, "inventory.csv")

    def get_promotions(self, filters: PromotionFilters) -> List[Promotion]:
        if self._tables.promotions.empty:
            return []

        promotions = _to_models(self._tables.promotions, Promotion, "promotions.csv")
        if filters.supplier_id:
            promotions = [p for p in promotions if p.supplier_id == filters.supplier_id]
        if filters.active_on:
            promotions = [p for p in promotions if p.start_date <= filters.active_on <= p.end_date]
        return promotions

    def get_product_cost(
        self,
        product_id: str,
        variant_id: str,
        supplier_id: Optional[str] = None,
    ) -> Optional[ProductCost]:
        df = self._tables.product_costs
        if df.empty:
            return None
        df = df[(df["product_id"] == product_id) & (df["variant_id"] == variant_id)]
        if supplier_id:
            quoted = df[df["supplier_id"] == supplier_id]
            if not quoted.empty:
                df = quoted

        costs = _to_models(df.head(1), ProductCost, "product_costs.csv")
        return costs[0] if costs else None
