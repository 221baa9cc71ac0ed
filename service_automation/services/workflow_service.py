"""
Request workflow — intake of a new service request and processing of the
customer's reply.

Collaborators (store, notifier, option source) are passed in; this module
holds no connections of its own.
"""
import logging
from dataclasses import dataclass

from ..errors import MissingCustomerEmail, NotFoundError, ValidationError
from ..models import STATUS_OPTIONS_SENT, ReplyDetails
from .entity_service import extract_customer_data
from .option_service import lookup_service_options
from .reply_parser import parse_reply
from .request_store import CREATED

logger = logging.getLogger(__name__)

INTAKE_REQUIRED = ('pageText', 'sku', 'assignedUserEmail')


@dataclass
class IntakeResult:
    request: object
    customer: object
    created: bool


@dataclass
class ReplyResult:
    request: object
    response: object
    lookup: object


def _missing(payload, fields):
    return [field for field in fields if not str(payload.get(field) or '').strip()]


def create_service_request(payload, store, notifier):
    """
    Extract customer data from the order page, save the request and alert staff.

    Raises ValidationError when an input field is missing or when the order
    number / customer email cannot be found in the page text.
    """
    missing = _missing(payload, INTAKE_REQUIRED)
    if missing:
        raise ValidationError(
            "Missing required fields", code='MISSING_FIELD',
            required=list(INTAKE_REQUIRED), missing=missing,
        )

    sku = str(payload['sku']).strip()
    assigned_user_email = str(payload['assignedUserEmail']).strip()
    customer = extract_customer_data(str(payload['pageText']))

    unresolved = customer.missing_required()
    if unresolved:
        raise ValidationError(
            "Could not extract required customer data", code='EXTRACTION_FAILED',
            unresolved=unresolved, extracted=customer.to_dict(),
        )

    request, outcome = store.upsert_request(
        si_number=customer.si_number,
        customer_email=customer.email,
        sku=sku,
        assigned_user_email=assigned_user_email,
        customer_name=customer.name,
        customer_phone=customer.phone,
        customer_address=customer.address,
        shipment_date=customer.shipment_date,
    )

    notifier.send_request_alert(assigned_user_email, customer, sku, payload.get('url') or 'N/A')
    return IntakeResult(request=request, customer=customer, created=outcome == CREATED)


def resolve_reply(payload):
    """
    Combine the structured reply fields with whatever can be parsed from
    pasted email text. Explicit fields win.
    """
    parsed = parse_reply(str(payload['emailText'])) if payload.get('emailText') else ReplyDetails()
    return ReplyDetails(
        customer_email=str(payload.get('customerEmail') or parsed.customer_email).strip(),
        serial_number=payload.get('serialNumber') or parsed.serial_number,
        warranty_status=payload.get('warrantyStatus') or parsed.warranty_status,
        problem_description=payload.get('problemDescription') or parsed.problem_description,
    )


def process_customer_reply(payload, store, notifier, option_source):
    """
    Record a customer's reply, look up service options and email them to staff.

    The pending request is the most recently created one still waiting on
    this customer's email address.
    """
    reply = resolve_reply(payload)
    if not reply.customer_email:
        raise MissingCustomerEmail("Could not determine the customer's email address")

    request = store.find_pending_request_by_email(reply.customer_email)
    if not request:
        raise NotFoundError(
            f"No pending service request found for {reply.customer_email}",
            customerEmail=reply.customer_email,
        )

    response = store.append_response(
        request.id, reply.serial_number, reply.problem_description, reply.warranty_status,
    )
    lookup = lookup_service_options(request.sku, reply.warranty_status, option_source)
    notifier.send_options_alert(request, reply, lookup.options)
    request = store.update_status(request.id, STATUS_OPTIONS_SENT)

    logger.info(
        f"Reply processed for {request.si_number}: {len(lookup.options)} option(s)"
        + (" (lookup failed)" if lookup.failed else "")
    )
    return ReplyResult(request=request, response=response, lookup=lookup)
