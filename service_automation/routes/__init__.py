"""
Blueprint accessors for the collaborators create_app() attaches to the app.
"""
from flask import current_app


def get_request_store():
    return current_app.extensions['request_store']


def get_catalog_store():
    return current_app.extensions['catalog_store']


def get_notifier():
    return current_app.extensions['notifier']


def get_option_source():
    return current_app.extensions['option_source']
