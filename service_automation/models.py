"""
Record types shared by the extractors, the store and the option matcher.
"""
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional

# ── Status / warranty vocabularies ────────────────────────
STATUS_WAITING_CUSTOMER = 'waiting_customer'
STATUS_OPTIONS_SENT = 'options_sent'

IN_WARRANTY = 'In Warranty'
OUT_OF_WARRANTY = 'Out of Warranty'
WARRANTY_UNKNOWN = 'Unknown'

SERIAL_NOT_PROVIDED = 'Not provided'
PROBLEM_FALLBACK = 'See customer email for details'


@dataclass
class CustomerData:
    """Fields scraped from an exported order-detail page."""

    name: str = ''
    email: str = ''
    phone: str = ''
    address: str = ''
    si_number: str = ''
    shipment_date: str = ''

    def missing_required(self) -> List[str]:
        missing = []
        if not self.si_number:
            missing.append('siNumber')
        if not self.email:
            missing.append('email')
        return missing

    def to_dict(self) -> Dict[str, str]:
        return {
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'address': self.address,
            'siNumber': self.si_number,
            'shipmentDate': self.shipment_date,
        }


@dataclass
class ReplyDetails:
    """Fields scraped from a customer's reply email."""

    customer_email: str = ''
    serial_number: str = SERIAL_NOT_PROVIDED
    warranty_status: str = WARRANTY_UNKNOWN
    problem_description: str = PROBLEM_FALLBACK


@dataclass
class ServiceRequest:
    id: int
    si_number: str
    customer_email: str
    sku: str
    assigned_user_email: str
    customer_name: str = ''
    customer_phone: str = ''
    customer_address: str = ''
    shipment_date: str = ''
    status: str = STATUS_WAITING_CUSTOMER
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row):
        return cls(**{key: row[key] for key in row.keys()})

    def to_dict(self):
        return asdict(self)


@dataclass
class CustomerResponse:
    id: int
    service_request_id: int
    serial_number: str
    problem_description: str
    warranty_status: str
    received_at: Optional[str] = None

    @classmethod
    def from_row(cls, row):
        return cls(**{key: row[key] for key in row.keys()})

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class ClassificationKey:
    """The (manufacturer, product type, warranty status) match key."""

    manufacturer: str
    product_type: str
    warranty_status: str


@dataclass
class OptionLookup:
    """Outcome of one service-options lookup.

    ``failed`` separates "the sheet had no matching rows" from
    "the sheet could not be read"; both carry an empty ``options`` list.
    """

    key: ClassificationKey
    options: List[Dict[str, str]] = field(default_factory=list)
    failed: bool = False
    error: Optional[str] = None
