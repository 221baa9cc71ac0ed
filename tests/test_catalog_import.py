"""Catalog TSV import."""
import pytest

from service_automation.catalog import import_catalog, main, parse_catalog, parse_catalog_line
from service_automation.database import init_database
from service_automation.services.catalog_store import CatalogStore

CATALOG = "\n".join([
    "MISSONI\tHOME ACCESSORIES\t8.05315E+12\tMAREA 100 HAND TOWEL 70X40\tActive",
    "BOSCH\tDISHWASHERS\tSMV6HCX01A\tBSH FULLY INT DW 15 P/S\tActive",
    "BOSCH\tDISHWASHERS\tSMU6HCS01A\tBSH SERIE 6 UB DW HOMECONNECT",
    "NEFF\tOVENS\tS185HCX01A\tNEFF N50 FULL INT DW 60CM\tActive",
    "ZIP\tWATER TREATMENT\t91295",
    "\tOVENS\tNOMAKER\tmissing manufacturer",
])


@pytest.fixture
def catalog_store(db_path) -> CatalogStore:
    init_database(db_path)
    return CatalogStore(db_path)


def test_parse_line_defaults_status_and_classifies():
    record = parse_catalog_line("BOSCH\tDISHWASHERS\tSMU6HCS01A\tBSH SERIE 6 UB DW")
    assert record == {
        "manufacturer": "BOSCH", "category": "DISHWASHERS", "sku": "SMU6HCS01A",
        "description": "BSH SERIE 6 UB DW", "product_type": "Dishwasher", "status": "Active",
    }


def test_parse_skips_short_and_incomplete_lines():
    records = parse_catalog(CATALOG)
    assert [r["sku"] for r in records] == ["8.05315E+12", "SMV6HCX01A", "SMU6HCS01A", "S185HCX01A"]
    assert records[3]["product_type"] == "Oven"
    assert records[0]["product_type"] == "Appliance"


def test_import_counts_new_and_updated(catalog_store):
    first = import_catalog(CATALOG, catalog_store, batch_size=2)
    assert first == {"parsed": 4, "imported": 4, "updated": 0, "skipped": 0}

    second = import_catalog(CATALOG.replace("Active", "Discontinued"), catalog_store)
    assert second["imported"] == 0
    assert second["updated"] == 4
    assert catalog_store.get_product("SMV6HCX01A")["status"] == "Discontinued"


def test_summary_top_manufacturers(catalog_store):
    import_catalog(CATALOG, catalog_store)
    summary = catalog_store.summary()

    assert summary["total"] == 4
    assert summary["manufacturers"] == 3
    assert summary["top_manufacturers"][0] == {"manufacturer": "BOSCH", "count": 2}


def test_cli_imports_file(tmp_path, db_path, capsys):
    catalog_file = tmp_path / "catalog.tsv"
    catalog_file.write_text(CATALOG, encoding="utf-8")

    assert main([str(catalog_file), "--db", db_path]) == 0
    output = capsys.readouterr().out
    assert "IMPORT COMPLETE" in output
    assert "1. BOSCH: 2 products" in output
    assert CatalogStore(db_path).get_product("S185HCX01A")["manufacturer"] == "NEFF"


def test_cli_missing_file_fails(tmp_path, db_path):
    assert main([str(tmp_path / "missing.tsv"), "--db", db_path]) == 1
