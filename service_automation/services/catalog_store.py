"""
Catalog store — the SKU → manufacturer/category/product type reference table.
"""
import logging
import sqlite3

from ..database import get_db
from ..errors import PersistenceError

logger = logging.getLogger(__name__)


class CatalogStore:
    """Repository over the product_catalog table."""

    def __init__(self, db_path):
        self.db_path = db_path

    def upsert_products(self, records):
        """
        Insert or update catalog rows keyed by SKU.

        Returns (imported, updated, skipped). A row that fails is logged and
        counted as skipped; the rest of the batch still goes in.
        """
        imported = updated = skipped = 0
        with get_db(self.db_path) as conn:
            for record in records:
                try:
                    existing = conn.execute(
                        "SELECT 1 FROM product_catalog WHERE sku = ?", (record['sku'],)
                    ).fetchone()
                    conn.execute('''
                        INSERT INTO product_catalog
                        (manufacturer, category, sku, description, product_type, status)
                        VALUES (?, ?, ?, ?, ?, ?)
                        ON CONFLICT(sku) DO UPDATE SET
                            manufacturer = excluded.manufacturer,
                            category = excluded.category,
                            description = excluded.description,
                            product_type = excluded.product_type,
                            status = excluded.status,
                            updated_at = CURRENT_TIMESTAMP
                    ''', (record['manufacturer'], record['category'], record['sku'],
                          record['description'], record['product_type'], record['status']))
                except sqlite3.Error as e:
                    logger.error(f"Error importing {record.get('sku')}: {e}")
                    skipped += 1
                    continue
                if existing:
                    updated += 1
                else:
                    imported += 1
            conn.commit()
        return imported, updated, skipped

    def get_product(self, sku):
        try:
            with get_db(self.db_path) as conn:
                row = conn.execute(
                    "SELECT * FROM product_catalog WHERE sku = ?", (sku,)
                ).fetchone()
        except sqlite3.Error as e:
            logger.error(f"Error looking up catalog SKU {sku}: {e}")
            raise PersistenceError("Failed to look up catalog product") from e
        return dict(row) if row else None

    def summary(self, top=10):
        """Totals plus the manufacturers with the most products."""
        with get_db(self.db_path) as conn:
            totals = conn.execute('''
                SELECT COUNT(*) AS total,
                       COUNT(DISTINCT manufacturer) AS manufacturers,
                       COUNT(DISTINCT product_type) AS product_types
                FROM product_catalog
            ''').fetchone()
            top_manufacturers = conn.execute('''
                SELECT manufacturer, COUNT(*) AS count
                FROM product_catalog
                GROUP BY manufacturer
                ORDER BY count DESC, manufacturer
                LIMIT ?
            ''', (top,)).fetchall()
        return {
            "total": totals['total'],
            "manufacturers": totals['manufacturers'],
            "product_types": totals['product_types'],
            "top_manufacturers": [dict(row) for row in top_manufacturers],
        }
