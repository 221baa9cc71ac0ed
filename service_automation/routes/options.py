"""
Lookup routes — service-option preview, catalog lookup and statistics.
"""
import logging

from flask import Blueprint, request, jsonify

from . import get_catalog_store, get_option_source, get_request_store
from ..errors import NotFoundError, ValidationError
from ..services.option_service import lookup_service_options

logger = logging.getLogger(__name__)

options_bp = Blueprint('options', __name__)


@options_bp.route('/api/service-options', methods=['GET'])
def preview_service_options():
    """
    Run the option matcher without recording anything.

    Query params: sku, warrantyStatus.
    """
    sku = request.args.get('sku', '').strip()
    warranty_status = request.args.get('warrantyStatus', '').strip()
    if not sku or not warranty_status:
        raise ValidationError(
            "sku and warrantyStatus are required", code='MISSING_FIELD',
            required=['sku', 'warrantyStatus'],
        )

    lookup = lookup_service_options(sku, warranty_status, get_option_source())
    return jsonify({
        "success": True,
        "manufacturer": lookup.key.manufacturer,
        "productType": lookup.key.product_type,
        "warrantyStatus": lookup.key.warranty_status,
        "count": len(lookup.options),
        "options": lookup.options,
    }), 200


@options_bp.route('/api/catalog/<sku>', methods=['GET'])
def get_catalog_product(sku):
    product = get_catalog_store().get_product(sku)
    if not product:
        raise NotFoundError(f"SKU {sku} not found in catalog")
    return jsonify({"success": True, "product": product}), 200


@options_bp.route('/api/stats', methods=['GET'])
def get_stats():
    """Request counts by status plus catalog totals."""
    stats = get_request_store().stats()
    catalog = get_catalog_store().summary(top=5)
    return jsonify({
        "success": True,
        "stats": {**stats, "catalog": catalog},
    }), 200
