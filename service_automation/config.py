"""
Centralized configuration — loads environment variables and defines constants.
"""
import os
import logging
from pathlib import Path
from urllib.parse import quote

from dotenv import load_dotenv

load_dotenv()

# Logging
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def _env_flag(name, default):
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes')


# ── Paths ─────────────────────────────────────────────────
# PACKAGE_DIR  → .../service_automation/
# PROJECT_ROOT → .../service-request-automation/
PACKAGE_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = PACKAGE_DIR.parent

DB_PATH = os.getenv('DATABASE_PATH', str(PROJECT_ROOT / 'service_requests.db'))

# ── Service identity ──────────────────────────────────────
SERVICE_NAME = 'Winning Service Automation'
SERVICE_VERSION = '1.0.0'

# ── SMTP ──────────────────────────────────────────────────
SMTP_HOST = os.getenv('SMTP_HOST', 'smtp.gmail.com')
SMTP_PORT = int(os.getenv('SMTP_PORT', 587))
SMTP_USER = os.getenv('SMTP_USER')
SMTP_PASSWORD = os.getenv('SMTP_PASSWORD')
SMTP_FROM = os.getenv('SMTP_FROM', '"Winning Service" <service@winning.com.au>')
SMTP_USE_TLS = _env_flag('SMTP_USE_TLS', 'true')
EMAIL_ENABLED = _env_flag('EMAIL_ENABLED', 'true')

# ── Service options sheet ─────────────────────────────────
SERVICE_OPTIONS_SHEET_ID = os.getenv(
    'SERVICE_OPTIONS_SHEET_ID',
    '16BTtqfZYo0X5c2uPkWLaNC2dSpvkJulFjCk2z3Cms4U'
)
SERVICE_OPTIONS_SHEET_NAME = os.getenv('SERVICE_OPTIONS_SHEET_NAME', 'Service Options')
SERVICE_OPTIONS_CSV_URL = os.getenv(
    'SERVICE_OPTIONS_CSV_URL',
    f"https://docs.google.com/spreadsheets/d/{SERVICE_OPTIONS_SHEET_ID}"
    f"/gviz/tq?tqx=out:csv&sheet={quote(SERVICE_OPTIONS_SHEET_NAME)}"
)
SHEET_FETCH_TIMEOUT = float(os.getenv('SHEET_FETCH_TIMEOUT', 30))

# ── Supabase (optional mirror) ────────────────────────────
SUPABASE_URL = os.getenv('SUPABASE_URL')
SUPABASE_KEY = os.getenv('SUPABASE_KEY')

# ── Flask ─────────────────────────────────────────────────
PORT = int(os.getenv('PORT', 3000))
INTAKE_RATE_LIMIT = os.getenv('INTAKE_RATE_LIMIT', '20 per minute')

# ── Startup validation ────────────────────────────────────
if EMAIL_ENABLED and not (SMTP_USER and SMTP_PASSWORD):
    logger.warning("SMTP_USER/SMTP_PASSWORD not set — staff emails will fail to send")

logger.info(
    f"Config loaded — db: {DB_PATH}, smtp: {SMTP_HOST}:{SMTP_PORT}, "
    f"email enabled: {EMAIL_ENABLED}"
)


def as_dict():
    """Snapshot of the settings a Flask app copies into ``app.config``."""
    return {
        'DB_PATH': DB_PATH,
        'SMTP_HOST': SMTP_HOST,
        'SMTP_PORT': SMTP_PORT,
        'SMTP_USER': SMTP_USER,
        'SMTP_PASSWORD': SMTP_PASSWORD,
        'SMTP_FROM': SMTP_FROM,
        'SMTP_USE_TLS': SMTP_USE_TLS,
        'EMAIL_ENABLED': EMAIL_ENABLED,
        'SERVICE_OPTIONS_CSV_URL': SERVICE_OPTIONS_CSV_URL,
        'SHEET_FETCH_TIMEOUT': SHEET_FETCH_TIMEOUT,
        'SUPABASE_URL': SUPABASE_URL,
        'SUPABASE_KEY': SUPABASE_KEY,
        'INTAKE_RATE_LIMIT': INTAKE_RATE_LIMIT,
    }
