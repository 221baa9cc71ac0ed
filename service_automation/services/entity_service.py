"""
Entity extraction — pull customer and order fields out of an exported
order-detail page.

Every field is optional here: a missing label yields ''. Deciding whether
enough was found to create a request is the caller's job.
"""
import re

from ..models import CustomerData
from .sanitize import normalize_pasted_text

# Precompiled patterns
_RE_SI_NUMBER = re.compile(r'SI\d{8}')
_RE_EMAIL = re.compile(r'[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}')


def _label_pattern(label):
    """`label`, optional colons, then the rest of the line."""
    return re.compile(rf'{re.escape(label)}\s*:*\s*([^\n]+)', re.IGNORECASE)


FIELD_LABELS = {
    'name': 'Sell-to Customer Name',
    'email': 'Sell-to Email',
    'phone': 'Sell-to Mobile Phone No.',
    'shipment_date': 'Shipment Date',
}

ADDRESS_LABELS = [
    'Sell-to Address',
    'Sell-to Address 2',
    'Sell-to City',
    'Sell-to State',
    'Sell-to Post Code',
]

_FIELD_PATTERNS = {field: _label_pattern(label) for field, label in FIELD_LABELS.items()}
_ADDRESS_PATTERNS = [_label_pattern(label) for label in ADDRESS_LABELS]


def extract_labeled_value(text, pattern):
    """First match of a label pattern, trimmed, or ''."""
    match = pattern.search(text)
    return match.group(1).strip() if match else ''


def extract_si_number(text):
    """Extract the order number (SI + 8 digits) from anywhere in the text."""
    match = _RE_SI_NUMBER.search(text or '')
    return match.group(0) if match else ''


def extract_email(text):
    """Extract the first email-shaped token from text."""
    match = _RE_EMAIL.search(text or '')
    return match.group(0) if match else ''


def extract_customer_data(page_text):
    """Extract the customer/order fields from an order-detail page."""
    text = normalize_pasted_text(page_text)
    values = {
        field: extract_labeled_value(text, pattern)
        for field, pattern in _FIELD_PATTERNS.items()
    }
    address_parts = [extract_labeled_value(text, pattern) for pattern in _ADDRESS_PATTERNS]

    return CustomerData(
        name=values['name'],
        email=values['email'],
        phone=values['phone'],
        address=', '.join(part for part in address_parts if part),
        si_number=extract_si_number(text),
        shipment_date=values['shipment_date'],
    )
