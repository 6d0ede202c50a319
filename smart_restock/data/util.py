from __future__ import annotations

from typing import Literal

from smart_restock.config import get_config
from .backends.csv_backend import CsvRestockDataAccess
from .backends.memory_backend import InMemoryRestockDataAccess
from .interface import RestockDataAccess


def get_data_access(kind: Literal["csv", "memory"] = "csv", **kwargs) -> RestockDataAccess:
    if kind == "csv":
        # Reads from configured CSV folder unless data_dir is given
        data_dir = kwargs.get("data_dir") or get_config().data_dir
        return CsvRestockDataAccess(data_dir=data_dir)
    if kind == "memory":
        return InMemoryRestockDataAccess(**kwargs)
    raise ValueError(f"Unknown data access kind: {kind}")
