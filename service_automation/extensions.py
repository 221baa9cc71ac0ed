"""
Shared Flask extensions, bound to the app in create_app().
"""
from flask import current_app
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

limiter = Limiter(key_func=get_remote_address, storage_uri="memory://")


def intake_rate_limit():
    return current_app.config['INTAKE_RATE_LIMIT']
