"""
Catalog import — load a tab-separated product list into product_catalog.

Usage:
    import-catalog catalog.tsv [--db PATH] [--batch-size 100]

Each line: manufacturer, category, SKU, description[, status].
"""
import argparse
import logging
import sys
from pathlib import Path

from . import config
from .database import init_database
from .services.catalog_store import CatalogStore
from .services.sku_classifier import classify_catalog_product

logger = logging.getLogger(__name__)

DEFAULT_STATUS = 'Active'
DEFAULT_BATCH_SIZE = 100


def parse_catalog_line(line):
    """Turn one TSV line into a catalog record, or None if it is unusable."""
    fields = line.split('\t')
    if len(fields) < 4:
        return None

    manufacturer = fields[0].strip()
    category = fields[1].strip()
    sku = fields[2].strip()
    description = fields[3].strip()
    status = fields[4].strip() if len(fields) > 4 and fields[4].strip() else DEFAULT_STATUS

    if not manufacturer or not sku:
        return None

    return {
        "manufacturer": manufacturer,
        "category": category,
        "sku": sku,
        "description": description,
        "product_type": classify_catalog_product(category, description),
        "status": status,
    }


def parse_catalog(text):
    """Parse the whole TSV blob, dropping unusable lines."""
    records = []
    for line in text.strip().split('\n'):
        record = parse_catalog_line(line.rstrip('\r'))
        if record:
            records.append(record)
    return records


def import_catalog(text, store, batch_size=DEFAULT_BATCH_SIZE):
    """Upsert all parsed records in batches; returns the import counters."""
    records = parse_catalog(text)
    logger.info(f"Parsed {len(records)} products")

    imported = updated = skipped = 0
    for start in range(0, len(records), batch_size):
        batch = records[start:start + batch_size]
        batch_imported, batch_updated, batch_skipped = store.upsert_products(batch)
        imported += batch_imported
        updated += batch_updated
        skipped += batch_skipped

        processed = min(start + batch_size, len(records))
        percent = round(processed / len(records) * 100)
        logger.info(
            f"Progress: {processed}/{len(records)} ({percent}%) - Imported: {imported}, "
            f"Updated: {updated}, Skipped: {skipped}"
        )

    return {
        "parsed": len(records),
        "imported": imported,
        "updated": updated,
        "skipped": skipped,
    }


def format_summary(counts, summary):
    lines = [
        "📊 IMPORT COMPLETE!",
        "═══════════════════════════════════════",
        f"✅ Total products in database: {summary['total']}",
        f"✅ Unique manufacturers: {summary['manufacturers']}",
        f"✅ Product types: {summary['product_types']}",
        f"✅ New records imported: {counts['imported']}",
        f"✅ Records updated: {counts['updated']}",
        f"⚠️  Records skipped: {counts['skipped']}",
        "",
        f"📈 Top {len(summary['top_manufacturers'])} Manufacturers:",
    ]
    for index, row in enumerate(summary['top_manufacturers'], start=1):
        lines.append(f"   {index}. {row['manufacturer']}: {row['count']} products")
    lines.append("═══════════════════════════════════════")
    return '\n'.join(lines)


def build_parser():
    parser = argparse.ArgumentParser(description="Import a tab-separated product catalog.")
    parser.add_argument("catalog_file", type=Path, help="TSV file: manufacturer, category, SKU, description[, status]")
    parser.add_argument("--db", default=config.DB_PATH, help="SQLite database path")
    parser.add_argument("--batch-size", type=int, default=DEFAULT_BATCH_SIZE)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        text = args.catalog_file.read_text(encoding='utf-8')
        init_database(args.db)
        store = CatalogStore(args.db)
        counts = import_catalog(text, store, batch_size=args.batch_size)
        print(format_summary(counts, store.summary()))
    except Exception as e:
        logger.error(f"Catalog import failed: {e}", exc_info=True)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
