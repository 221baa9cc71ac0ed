"""
Service request routes — intake, customer reply, and request lookups.
"""
import logging

from flask import Blueprint, request, jsonify

from . import get_notifier, get_option_source, get_request_store
from ..errors import NotFoundError, ValidationError
from ..extensions import limiter, intake_rate_limit
from ..services.workflow_service import create_service_request, process_customer_reply

logger = logging.getLogger(__name__)

requests_bp = Blueprint('requests', __name__)


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        # Form posts are accepted as well as JSON
        data = request.form.to_dict()
    return data


@requests_bp.route('/api/service-request', methods=['POST'])
@limiter.limit(intake_rate_limit)
def service_request():
    """
    Create (or refresh) a service request from an exported order page.

    Expected JSON payload:
        { "pageText": "...", "sku": "B12345", "assignedUserEmail": "staff@...",
          "url": "https://..." }
    """
    logger.info("📥 Received service request")
    result = create_service_request(_json_body(), get_request_store(), get_notifier())

    return jsonify({
        "success": True,
        "message": "Service request created" if result.created else "Service request updated",
        "siNumber": result.request.si_number,
        "created": result.created,
    }), 200


@requests_bp.route('/api/customer-reply', methods=['POST'])
@limiter.limit(intake_rate_limit)
def customer_reply():
    """
    Process a customer's reply and email the matching service options to staff.

    Accepts structured fields (customerEmail, serialNumber, problemDescription,
    warrantyStatus), pasted email text (emailText), or both.
    """
    logger.info("📧 Processing customer reply")
    result = process_customer_reply(
        _json_body(), get_request_store(), get_notifier(), get_option_source(),
    )

    return jsonify({
        "success": True,
        "message": "Reply processed",
        "siNumber": result.request.si_number,
        "optionsFound": len(result.lookup.options),
    }), 200


@requests_bp.route('/api/service-requests', methods=['GET'])
def list_service_requests():
    """
    List service requests, newest first.

    Query params: status, customer_email, limit, offset.
    """
    try:
        limit = min(int(request.args.get('limit', 50)), 200)
        offset = int(request.args.get('offset', 0))
    except ValueError:
        raise ValidationError("limit and offset must be integers", code='INVALID_PARAM') from None

    requests_found = get_request_store().list_requests(
        status=request.args.get('status'),
        customer_email=request.args.get('customer_email'),
        limit=limit,
        offset=offset,
    )
    return jsonify({
        "success": True,
        "count": len(requests_found),
        "requests": [r.to_dict() for r in requests_found],
    }), 200


@requests_bp.route('/api/service-requests/<si_number>', methods=['GET'])
def get_service_request(si_number):
    """Get one service request with its customer responses."""
    store = get_request_store()
    service_request = store.get_request(si_number)
    if not service_request:
        raise NotFoundError(f"Service request {si_number} not found")

    body = service_request.to_dict()
    body['responses'] = [r.to_dict() for r in store.list_responses(service_request.id)]
    return jsonify({"success": True, "request": body}), 200
