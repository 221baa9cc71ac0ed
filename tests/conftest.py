"""Shared fixtures: a temp-database app, a recording notifier, a canned options sheet."""
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from service_automation import create_app
from service_automation.services.notifier import Notifier
from service_automation.services.option_service import ServiceOptionSource
from service_automation.services.request_store import RequestStore

OPTIONS_CSV = (
    'Manufacturer,Product Type,Warranty Status,Service Agent,Phone Number,'
    'Business Hours,Service Call Fee,Expected Timeframe,Phone Instructions\n'
    'Neff,Oven,"In Warranty",BSH Service,1300 368 339,"Mon-Fri, 8am-5pm",$0,2-3 days,Quote the serial number\n'
    'Neff,Oven,Out of Warranty,Local Oven Repairs,02 9999 0000,,$120,1 week,\n'
    'Miele,Cooktop,In Warranty,Miele Service,1300 464 353,,$0,3-5 days,Book online\n'
)

PAGE_TEXT = """Sales Invoice SI12345678
Sell-to Customer Name: Jane Doe
Sell-to Email: jane@example.com
Sell-to Mobile Phone No.: 0400 000 000
Sell-to Address: 1 Main St
Sell-to City: Sydney
Sell-to State: NSW
Sell-to Post Code: 2000
Shipment Date: 01/02/2025
"""


class RecordingNotifier(Notifier):
    """Notifier that records messages instead of talking to SMTP."""

    def __init__(self):
        super().__init__(host='localhost', port=25, sender='test@example.com')
        self.sent = []

    def send(self, to, subject, body):
        self.sent.append({"to": to, "subject": subject, "body": body})
        return True


class StaticOptionSource(ServiceOptionSource):
    """Option source serving a fixed CSV body."""

    def __init__(self, csv_text=OPTIONS_CSV):
        super().__init__('https://sheets.example.com/options.csv')
        self.csv_text = csv_text
        self.fetches = 0

    def fetch_csv(self):
        self.fetches += 1
        return self.csv_text


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    return str(tmp_path / "service_requests.db")


@pytest.fixture
def app(db_path):
    app = create_app({
        'DB_PATH': db_path,
        'EMAIL_ENABLED': False,
        'RATELIMIT_ENABLED': False,
        'SUPABASE_URL': None,
        'SUPABASE_KEY': None,
        'TESTING': True,
    })
    app.extensions['notifier'] = RecordingNotifier()
    app.extensions['option_source'] = StaticOptionSource()
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def notifier(app) -> RecordingNotifier:
    return app.extensions['notifier']


@pytest.fixture
def store(app) -> RequestStore:
    return app.extensions['request_store']


@pytest.fixture
def page_text() -> str:
    return PAGE_TEXT
