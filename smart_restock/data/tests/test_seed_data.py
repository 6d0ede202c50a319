from smart_restock.data import seed_data
from smart_restock.data.backends.csv_backend import CsvRestockDataAccess
from smart_restock.data.models import AnalysisScope, InventoryFilters
from smart_restock.engine.service import SmartRestockService


def test_seeded_data_round_trips_through_engine(tmp_path, capsys):
    assert seed_data.main(["--stores", "2", "--products", "12", "--output-dir", str(tmp_path), "--seed", "7"]) == 0
    assert "Generated data in" in capsys.readouterr().out
    for name in ("products.csv", "inventory.csv", "product_costs.csv", "promotions.csv"):
        assert (tmp_path / name).exists()

    data_access = CsvRestockDataAccess(data_dir=tmp_path)
    lines = data_access.get_inventory(InventoryFilters(store_id="store-1"))
    assert len(lines) == 12
    assert all(line.brand_id and line.category_id for line in lines)
    assert all(line.available_stock >= 0 for line in lines)

    result = SmartRestockService().analyze_store(AnalysisScope(store_id="store-2"), data_access)
    assert result.summary.total_items == 12
    assert len(result.categorized.flatten()) == result.summary.low_stock_items


def test_same_seed_same_data(tmp_path):
    a, b = tmp_path / "a", tmp_path / "b"
    seed_data.main(["--output-dir", str(a), "--seed", "3"])
    seed_data.main(["--output-dir", str(b), "--seed", "3"])
    assert (a / "inventory.csv").read_text() == (b / "inventory.csv").read_text()


def test_no_overwrite(tmp_path, capsys):
    seed_data.main(["--output-dir", str(tmp_path)])
    assert seed_data.main(["--output-dir", str(tmp_path), "--no-overwrite"]) == 2
    assert "Refusing to overwrite" in capsys.readouterr().err
