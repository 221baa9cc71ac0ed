"""
Database layer — SQLite connection helper, schema, optional Supabase mirror.

Strategy:
  • SQLite is the source of truth for requests, responses and the catalog
  • If Supabase is configured, request writes are mirrored there too
  • Mirror writes happen in a background thread so callers never wait
"""
import sqlite3
import logging
import threading
from contextlib import contextmanager

logger = logging.getLogger(__name__)

SCHEMA = [
    '''
    CREATE TABLE IF NOT EXISTS service_requests (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        si_number TEXT UNIQUE NOT NULL,
        customer_name TEXT,
        customer_email TEXT NOT NULL,
        customer_phone TEXT,
        customer_address TEXT,
        sku TEXT NOT NULL,
        shipment_date TEXT,
        assigned_user_email TEXT NOT NULL,
        status TEXT DEFAULT 'waiting_customer',
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
        updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
    )
    ''',
    'CREATE INDEX IF NOT EXISTS idx_customer_email ON service_requests(customer_email)',
    'CREATE INDEX IF NOT EXISTS idx_status ON service_requests(status)',
    '''
    CREATE TABLE IF NOT EXISTS customer_responses (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        service_request_id INTEGER NOT NULL REFERENCES service_requests(id),
        serial_number TEXT,
        problem_description TEXT,
        warranty_status TEXT,
        received_at DATETIME DEFAULT CURRENT_TIMESTAMP
    )
    ''',
    'CREATE INDEX IF NOT EXISTS idx_response_request ON customer_responses(service_request_id)',
    '''
    CREATE TABLE IF NOT EXISTS product_catalog (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        sku TEXT UNIQUE NOT NULL,
        manufacturer TEXT NOT NULL,
        category TEXT,
        description TEXT,
        product_type TEXT,
        status TEXT DEFAULT 'Active',
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
        updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
    )
    ''',
    'CREATE INDEX IF NOT EXISTS idx_catalog_manufacturer ON product_catalog(manufacturer)',
    'CREATE INDEX IF NOT EXISTS idx_catalog_product_type ON product_catalog(product_type)',
]


# ── SQLite helpers ────────────────────────────────────────
@contextmanager
def get_db(db_path):
    """Context-managed SQLite connection with WAL mode + row factory."""
    conn = sqlite3.connect(db_path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    try:
        yield conn
    finally:
        conn.close()


def init_database(db_path):
    """Create the tables + indexes if they don't exist."""
    with get_db(db_path) as conn:
        for statement in SCHEMA:
            conn.execute(statement)
        conn.commit()
    logger.info(f"SQLite database initialized at {db_path}")


# ── Supabase mirror ───────────────────────────────────────
def create_supabase_client(url, key):
    """Return a Supabase client, or None when unconfigured or unreachable."""
    if not (url and key):
        logger.info("Supabase credentials not found — cloud mirror disabled")
        return None
    try:
        from supabase import create_client
        client = create_client(url, key)
        logger.info("Supabase client initialized successfully")
        return client
    except Exception as e:
        logger.error(f"Failed to initialize Supabase: {e}")
        return None


class SupabaseMirror:
    """Copies service-request rows to Supabase in daemon threads."""

    def __init__(self, client, table='service_requests'):
        self.client = client
        self.table = table

    def _write(self, record):
        try:
            self.client.table(self.table).upsert(record, on_conflict='si_number').execute()
        except Exception as e:
            logger.error(f"Failed to mirror {record.get('si_number')} to Supabase: {e}")

    def mirror(self, record):
        """Mirror a request record (non-blocking)."""
        thread = threading.Thread(target=self._write, args=(record,), daemon=True)
        thread.start()
