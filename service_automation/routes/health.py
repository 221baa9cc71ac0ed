"""
Health routes — service banner and liveness check.
"""
from datetime import datetime, timezone

from flask import Blueprint, jsonify

from ..config import SERVICE_NAME, SERVICE_VERSION

health_bp = Blueprint('health', __name__)


@health_bp.route('/', methods=['GET'])
def index():
    return jsonify({
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }), 200


@health_bp.route('/health', methods=['GET'])
def health_check():
    return jsonify({"status": "ok"}), 200
